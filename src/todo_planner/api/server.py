# src/todo_planner/api/server.py

"""
HTTP surface of the task service (FastAPI).

Endpoints:
    GET    /api/nextdate?now=&date=&repeat=   -> next occurrence (plain text)
    POST   /api/task                          -> {"id": "..."}
    GET    /api/task?id=                      -> task object
    PUT    /api/task                          -> {}
    DELETE /api/task?id=                      -> {}
    POST   /api/task/done?id=                 -> {}
    GET    /api/tasks?search=                 -> {"tasks": [...]}

Domain errors are reported as {"error": "..."} in a normal JSON response;
only unsupported methods are signalled with a status code (405).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from pydantic import ValidationError as PayloadError
from starlette.concurrency import run_in_threadpool

from .. import __version__
from ..core.errors import ErrorKind, TaskError, ValidationError
from ..tasks.task_service import TaskService
from .schemas import TaskOut, TaskPayload, parse_task_id

logger = logging.getLogger(__name__)


def _error(message: str) -> JSONResponse:
    return JSONResponse({"error": message})


def _require_id(raw: str | None) -> int:
    task_id = parse_task_id(raw)
    if task_id is None:
        raise ValidationError("id required")
    return task_id


async def _read_payload(request: Request) -> TaskPayload:
    try:
        data: Any = await request.json()
        return TaskPayload.model_validate(data)
    except (ValueError, PayloadError) as e:
        raise ValidationError("invalid JSON") from e


def create_app(
    service: TaskService,
    *,
    web_dir: Path | None = None,
    title: str = "todo-planner",
) -> FastAPI:
    app = FastAPI(title=title, version=__version__)
    app.state.service = service

    @app.exception_handler(TaskError)
    async def _task_error(request: Request, exc: TaskError) -> JSONResponse:
        if exc.kind is ErrorKind.STORAGE:
            # Details are already logged by the store.
            return _error("database error")
        logger.debug("%s %s rejected: %s", request.method, request.url.path, exc.message)
        return _error(exc.message)

    # ---- helpers ----

    @app.get("/api/nextdate")
    async def api_next_date(
        now: str | None = None,
        date: str = "",
        repeat: str = "",
    ) -> PlainTextResponse:
        result = service.next_date(now, date, repeat)
        return PlainTextResponse(result)

    # ---- single task ----

    @app.post("/api/task")
    async def api_add_task(request: Request) -> JSONResponse:
        payload = await _read_payload(request)
        task_id = await run_in_threadpool(service.create, payload.to_task(with_id=False))
        return JSONResponse({"id": str(task_id)})

    @app.get("/api/task")
    async def api_get_task(task_id: str | None = Query(None, alias="id")) -> JSONResponse:
        task = await run_in_threadpool(service.read, _require_id(task_id))
        return JSONResponse(TaskOut.from_task(task).model_dump())

    @app.put("/api/task")
    async def api_update_task(request: Request) -> JSONResponse:
        payload = await _read_payload(request)
        await run_in_threadpool(service.update, payload.to_task())
        return JSONResponse({})

    @app.delete("/api/task")
    async def api_delete_task(task_id: str | None = Query(None, alias="id")) -> JSONResponse:
        await run_in_threadpool(service.delete, _require_id(task_id))
        return JSONResponse({})

    @app.post("/api/task/done")
    async def api_task_done(task_id: str | None = Query(None, alias="id")) -> JSONResponse:
        await run_in_threadpool(service.complete, _require_id(task_id))
        return JSONResponse({})

    # ---- list ----

    @app.get("/api/tasks")
    async def api_list_tasks(search: str | None = None) -> JSONResponse:
        tasks = await run_in_threadpool(service.list_tasks, None, search)
        return JSONResponse({"tasks": [TaskOut.from_task(t).model_dump() for t in tasks]})

    # Front-end files (optional). Mounted last so /api routes take precedence.
    if web_dir is not None:
        if web_dir.is_dir():
            app.mount("/", StaticFiles(directory=str(web_dir), html=True), name="web")
        else:
            logger.warning("Web dir %s does not exist; serving API only.", web_dir)

    return app

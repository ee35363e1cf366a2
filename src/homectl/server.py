"""Line-oriented JSON control server.

Each request is one JSON object per line, ``{"op": "...", ...}``. Each
response is one line: ``{"ok": true, "result": ...}`` or
``{"ok": false, "error": ..., "status": ..., "message": ...}``.
"""

from __future__ import annotations

import asyncio
import inspect
import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError as PydanticValidationError

from homectl.config import Settings
from homectl.context import HomeContext
from homectl.core.scheduling import AsyncioScheduler
from homectl.errors import HomeError, ValidationError

if TYPE_CHECKING:
    from asyncio import StreamReader, StreamWriter

logger = logging.getLogger(__name__)

Request = dict[str, Any]


def _require(request: Request, key: str) -> Any:
    value = request.get(key)
    if value is None or value == "":
        raise ValidationError(f"{key} is required")
    return value


def _error(exc: HomeError) -> dict[str, Any]:
    return {"ok": False, **exc.to_dict()}


@dataclass
class ControlServer:
    context: HomeContext
    host: str = "127.0.0.1"
    port: int = 8765

    _server: asyncio.Server | None = field(default=None, repr=False)
    _ops: dict[str, Callable[[Request], Any]] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        self._ops = {
            "rooms": self._op_rooms,
            "apply": self._op_apply,
            "update": self._op_update,
            "leave": self._op_leave,
            "arrive": self._op_arrive,
            "notify": self._op_notify,
            "notifications": self._op_notifications,
            "display.set": self._op_display_set,
            "display.get": self._op_display_get,
            "fridge": self._op_fridge,
            "fridge.add": self._op_fridge_add,
            "fridge.remove": self._op_fridge_remove,
            "chat": self._op_chat,
            "timers": self._op_timers,
        }

    @property
    def sockets(self) -> list[Any]:
        return list(self._server.sockets) if self._server else []

    async def start(self) -> None:
        self._server = await asyncio.start_server(
            self._handle_client, self.host, self.port
        )
        logger.info("Control server listening on %s:%d", self.host, self.port)

    async def stop(self) -> None:
        if self._server:
            self._server.close()
            await self._server.wait_closed()
            logger.info("Control server stopped")

    async def run_forever(self) -> None:
        await self.start()
        if self._server:
            await self._server.serve_forever()

    async def _handle_client(
        self, reader: "StreamReader", writer: "StreamWriter"
    ) -> None:
        addr = writer.get_extra_info("peername")
        logger.info("Client connected: %s", addr)

        try:
            while True:
                line = await reader.readline()
                if not line:
                    break
                if not line.strip():
                    continue

                response = await self.handle_line(line)
                payload = json.dumps(response, ensure_ascii=False) + "\n"
                writer.write(payload.encode("utf-8"))
                await writer.drain()

        except (ConnectionResetError, BrokenPipeError):
            logger.debug("Client disconnected: %s", addr)
        finally:
            writer.close()
            await writer.wait_closed()

    async def handle_line(self, line: bytes) -> dict[str, Any]:
        try:
            request = json.loads(line)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            return _error(ValidationError(f"Invalid JSON: {exc}"))
        if not isinstance(request, dict):
            return _error(ValidationError("Request must be a JSON object"))
        return await self.handle(request)

    async def handle(self, request: Request) -> dict[str, Any]:
        op = request.get("op")
        handler = self._ops.get(op) if isinstance(op, str) else None
        if handler is None:
            return _error(ValidationError(f"Unknown op: {op!r}"))

        logger.debug("Request %s", op)
        try:
            result = handler(request)
            if inspect.isawaitable(result):
                result = await result
        except HomeError as exc:
            logger.debug("Request %s failed: %s", op, exc.message)
            return _error(exc)
        except PydanticValidationError as exc:
            return _error(ValidationError.from_pydantic(exc))
        except ValueError as exc:
            # unreadable store document
            logger.error("Request %s failed: %s", op, exc)
            return _error(HomeError("Store could not be read", detail=str(exc)))
        return {"ok": True, "result": result}

    def _op_rooms(self, request: Request) -> Any:
        return self.context.get_rooms().to_document()

    def _op_apply(self, request: Request) -> Any:
        device = self.context.apply_action(
            _require(request, "room"),
            _require(request, "device"),
            request.get("action"),
            request.get("params") or {},
        )
        return device.to_document()

    def _op_update(self, request: Request) -> Any:
        device = self.context.update_device(
            _require(request, "device"),
            state=request.get("state"),
            target_temp=request.get("targetTemp"),
            mode=request.get("mode"),
            brightness=request.get("brightness"),
        )
        return device.to_document()

    def _op_leave(self, request: Request) -> Any:
        return self.context.leave_home().to_document()

    def _op_arrive(self, request: Request) -> Any:
        return self.context.arrive_home().to_document()

    def _op_notify(self, request: Request) -> Any:
        notification = self.context.notify(
            request.get("message"), request.get("severity")
        )
        return notification.model_dump(mode="json")

    def _op_notifications(self, request: Request) -> Any:
        return [n.model_dump(mode="json") for n in self.context.drain_notifications()]

    def _op_display_set(self, request: Request) -> Any:
        message = self.context.set_display_message(
            request.get("text"), request.get("duration")
        )
        return message.model_dump(mode="json")

    def _op_display_get(self, request: Request) -> Any:
        message = self.context.get_display_message()
        if message is None:
            return {"text": None}
        return message.model_dump(mode="json")

    def _op_fridge(self, request: Request) -> Any:
        return self.context.list_fridge().to_document()

    def _op_fridge_add(self, request: Request) -> Any:
        item = self.context.add_fridge_item(
            request.get("name"),
            quantity=request.get("quantity"),
            expiry=request.get("expiry"),
            category=request.get("category"),
        )
        return item.model_dump(mode="json")

    def _op_fridge_remove(self, request: Request) -> Any:
        item = self.context.remove_fridge_item(request.get("id"))
        return item.model_dump(mode="json")

    async def _op_chat(self, request: Request) -> Any:
        # the assistant blocks for up to its timeout; keep the loop free
        reply = await asyncio.to_thread(self.context.chat, request.get("message"))
        return {"reply": reply}

    def _op_timers(self, request: Request) -> Any:
        return [job.to_dict() for job in self.context.timers.pending()]


async def run_server(
    settings: Settings, host: str | None = None, port: int | None = None
) -> None:
    context = HomeContext(settings, scheduler=AsyncioScheduler())
    server = ControlServer(
        context,
        host=host or settings.server.host,
        port=port or settings.server.port,
    )
    try:
        await server.run_forever()
    finally:
        context.close()

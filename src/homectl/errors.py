"""Error kinds surfaced to callers of the home context."""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError


class HomeError(Exception):
    """Base class for errors reported back to a caller."""

    kind = "error"
    status_code = 500

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {
            "error": self.kind,
            "status": self.status_code,
            "message": self.message,
        }
        if self.detail is not None:
            data["detail"] = self.detail
        return data


class ValidationError(HomeError):
    """A required field is missing or a value is out of range."""

    kind = "validation"
    status_code = 400

    @classmethod
    def from_pydantic(cls, exc: PydanticValidationError) -> ValidationError:
        error = exc.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or "value"
        return cls(f"Invalid {field}: {error['msg']}")


class NotFoundError(HomeError):
    kind = "not_found"
    status_code = 404


class RoomNotFoundError(NotFoundError):
    def __init__(self, room: str) -> None:
        super().__init__(f"Room '{room}' not found")
        self.room = room


class DeviceNotFoundError(NotFoundError):
    def __init__(self, device: str, room: str | None = None) -> None:
        if room is None:
            message = f"Device '{device}' not found"
        else:
            message = f"Room '{room}' has no '{device}' device"
        super().__init__(message)
        self.room = room
        self.device = device


class ItemNotFoundError(NotFoundError):
    def __init__(self, item_id: int) -> None:
        super().__init__(f"Fridge item {item_id} not found")
        self.item_id = item_id


class ExternalToolError(HomeError):
    """The assistant subprocess failed or timed out."""

    kind = "external_tool"
    status_code = 500

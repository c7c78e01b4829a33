"""Error payload shared by the library and the CLI."""

from typing import Any

from pydantic import BaseModel, Field


class AuditError(BaseModel):
    """A failed resolve, parse or drift evaluation, in reportable form."""

    model_config = {"frozen": True}

    code: str = Field(description="Stable error code, e.g. UNSUPPORTED_VERSION")
    message: str = Field(description="Human-readable error message")
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Versions, paths, components or fields involved",
    )

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def detail_lines(self) -> list[str]:
        """Render details as ``key: value`` lines, lists joined by commas."""
        lines = []
        for key, value in self.details.items():
            if isinstance(value, (list, tuple)):
                value = ", ".join(str(v) for v in value) or "none"
            lines.append(f"{key}: {value}")
        return lines

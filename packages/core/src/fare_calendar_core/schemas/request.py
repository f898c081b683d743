"""Calendar request schema and window presets."""

from __future__ import annotations

from datetime import date  # noqa: TC003

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .enums import CalendarVariant


class WindowSpec(BaseModel):
    """Number of days planned before and after the anchor date."""

    model_config = ConfigDict(frozen=True)

    before_days: int = Field(ge=0)
    after_days: int = Field(ge=0)

    @property
    def total_days(self) -> int:
        return self.before_days + self.after_days + 1


WINDOW_PRESETS: dict[CalendarVariant, WindowSpec] = {
    CalendarVariant.DAYS_45: WindowSpec(before_days=30, after_days=15),
    CalendarVariant.DAYS_15: WindowSpec(before_days=0, after_days=15),
}


class CalendarRequest(BaseModel):
    """One price-calendar query. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    origin: str = Field(min_length=3, max_length=3, description="IATA location code")
    destination: str = Field(
        min_length=3, max_length=3, description="IATA location code"
    )
    anchor_date: date
    passenger_count: int = Field(default=1, ge=1, le=9)
    window_before_days: int = Field(default=30, ge=0)
    window_after_days: int = Field(default=15, ge=0)

    @field_validator("origin", "destination", mode="before")
    @classmethod
    def _normalize_code(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @model_validator(mode="after")
    def _validate_route(self) -> CalendarRequest:
        if self.origin == self.destination:
            msg = "origin and destination must differ"
            raise ValueError(msg)
        return self

    @property
    def window(self) -> WindowSpec:
        return WindowSpec(
            before_days=self.window_before_days,
            after_days=self.window_after_days,
        )

    @property
    def route(self) -> str:
        return f"{self.origin} → {self.destination}"

"""Duration labels as stored on session rows ("25m", "1h", "45s")."""

import re
from enum import Enum
from typing import NamedTuple

from BackEnd.core.log import setup_logger

logger = setup_logger(__name__)

_LEADING_INT = re.compile(r"\s*(\d+)")
_UNIT = re.compile(r"[hms]", re.IGNORECASE)


class DurationUnit(Enum):
	HOURS = "h"
	MINUTES = "m"
	SECONDS = "s"


class Duration(NamedTuple):
	amount: int
	unit: DurationUnit

	@property
	def minutes(self) -> float:
		if self.unit is DurationUnit.HOURS:
			return self.amount * 60
		if self.unit is DurationUnit.SECONDS:
			return self.amount / 60
		return self.amount

	@classmethod
	def parse(cls, label) -> "Duration":
		"""Parse a label; malformed input becomes a zero-minute duration.

		Only the leading integer and the first unit letter after it count, so
		"1h30m" reads as one hour.
		"""
		if not isinstance(label, str):
			return cls(0, DurationUnit.MINUTES)
		match = _LEADING_INT.match(label)
		if match is None:
			if label.strip():
				logger.debug(f"Ignoring malformed duration label {label!r}")
			return cls(0, DurationUnit.MINUTES)
		unit = _UNIT.search(label, match.end())
		if unit is None:
			return cls(int(match.group(1)), DurationUnit.MINUTES)
		return cls(int(match.group(1)), DurationUnit(unit.group(0).lower()))

	def label(self) -> str:
		return f"{self.amount}{self.unit.value}"


def parse_duration(label) -> float:
	"""Return the minutes a duration label stands for (0 when malformed)."""
	return Duration.parse(label).minutes


def elapsed_duration(seconds: int) -> Duration:
	minutes = seconds // 60
	if minutes > 0:
		return Duration(minutes, DurationUnit.MINUTES)
	return Duration(seconds, DurationUnit.SECONDS)


def format_elapsed(seconds: int) -> str:
	"""Whole minutes when at least one minute elapsed, otherwise seconds."""
	return elapsed_duration(seconds).label()


def format_clock(seconds: int) -> str:
	"""Format seconds as MM:SS (minutes may exceed 59)."""
	m, s = divmod(max(0, int(seconds)), 60)
	return f"{m:02}:{s:02}"


def format_hours(minutes: float) -> str:
	"""One-decimal hours for the dashboard headline, e.g. 90 -> '1.5'."""
	return f"{minutes / 60:.1f}"

"""Today's study minutes per subject, for the dashboard chart and headline."""

from dataclasses import dataclass, field
from datetime import datetime
from collections.abc import Mapping
from typing import Dict, List

from BackEnd.core.clock import local_midnight
from BackEnd.core.config import DEFAULT_SUBJECT_COLOR, NO_DATA_LABEL, PLACEHOLDER_COLOR, RECENT_SESSIONS_LIMIT
from BackEnd.core.durations import format_hours
from BackEnd.core.log import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class ChartSlice:
	name: str
	minutes: float
	color: str
	placeholder: bool = False

	@property
	def weight(self):
		"""Pie weight; the placeholder slice fills the whole chart."""
		return 1.0 if self.placeholder else self.minutes


@dataclass
class AggregatedDay:
	per_subject_minutes: Dict[str, float]
	total_minutes: float
	chart_series: List[ChartSlice]

	@property
	def hours_label(self):
		return format_hours(self.total_minutes)


@dataclass
class DashboardSummary:
	day: AggregatedDay
	since: datetime
	recent_sessions: list = field(default_factory=list)
	subjects: list = field(default_factory=list)


def colors_by_name(subjects) -> Dict[str, str]:
	return {s.name: s.color for s in subjects}

def _color_lookup(subject_colors):
	if subject_colors is None:
		return lambda name: DEFAULT_SUBJECT_COLOR
	if isinstance(subject_colors, Mapping):
		return lambda name: subject_colors.get(name) or DEFAULT_SUBJECT_COLOR
	return lambda name: subject_colors(name) or DEFAULT_SUBJECT_COLOR

def aggregate(sessions, subject_colors=None) -> AggregatedDay:
	"""Sum session minutes by subject name, in first-seen order.

	`sessions` must already be limited to the aggregation window.
	`subject_colors` is a name -> color mapping or callable.
	"""
	color_for = _color_lookup(subject_colors)
	per_subject = {}
	for session in sessions:
		per_subject[session.subject_name] = per_subject.get(session.subject_name, 0) + session.minutes
	total = sum(per_subject.values())

	if not per_subject:
		series = [ChartSlice(NO_DATA_LABEL, 0.0, PLACEHOLDER_COLOR, placeholder=True)]
	else:
		series = [ChartSlice(name, minutes, color_for(name)) for name, minutes in per_subject.items()]
	return AggregatedDay(per_subject_minutes=per_subject, total_minutes=total, chart_series=series)

def load_dashboard(session_store, subject_source, now=None, recent_limit=RECENT_SESSIONS_LIMIT) -> DashboardSummary:
	"""Pull today's sessions (since local midnight) and summarise them."""
	since = local_midnight(now)
	subjects = sorted(subject_source.list_subjects(), key=lambda s: s.percentage, reverse=True)
	sessions = session_store.list_sessions_since(since)
	day = aggregate(sessions, colors_by_name(subjects))
	logger.debug(f"Dashboard: {len(sessions)} sessions since {since.isoformat()}, {day.total_minutes:.1f} min")
	return DashboardSummary(
		day=day,
		since=since,
		recent_sessions=session_store.list_recent_sessions(recent_limit),
		subjects=subjects,
	)

from dataclasses import dataclass, field, replace
from typing import List, Optional

from BackEnd.core.config import STATUS_DONE, DEFAULT_SUBJECT_COLOR, DEFAULT_SUBJECT_ICON
from BackEnd.core.durations import Duration


@dataclass(frozen=True)
class User:
	id: int
	email: str
	display_name: Optional[str] = None

	@property
	def first_name(self) -> str:
		"""Greeting name: first word of the display name, else the email's local part."""
		if self.display_name:
			return self.display_name.split(" ")[0]
		return self.email.split("@")[0]


@dataclass
class Topic:
	id: int
	subject_id: int
	name: str


@dataclass
class Subject:
	id: int
	name: str
	icon: str = DEFAULT_SUBJECT_ICON
	color: str = DEFAULT_SUBJECT_COLOR
	planned_time: str = ""
	percentage: int = 0
	position: Optional[int] = None
	topics: List[Topic] = field(default_factory=list)


@dataclass(frozen=True)
class StudySessionRecord:
	subject_name: str
	duration: str
	status: str = STATUS_DONE
	topic_name: Optional[str] = None
	notes: Optional[str] = None
	icon: str = DEFAULT_SUBJECT_ICON
	color: str = DEFAULT_SUBJECT_COLOR
	user_id: Optional[int] = None
	id: Optional[int] = None
	created_at: Optional[str] = None
	parsed: Duration = field(default=None, compare=False, repr=False)

	def __post_init__(self):
		if self.parsed is None:
			object.__setattr__(self, "parsed", Duration.parse(self.duration))

	@property
	def minutes(self) -> float:
		return self.parsed.minutes

	def stored(self, id, created_at) -> "StudySessionRecord":
		return replace(self, id=id, created_at=created_at)


@dataclass(frozen=True)
class NoteRecord:
	title: str
	category: str
	preview: str = ""
	tags: tuple = ()
	subject_id: Optional[int] = None
	user_id: Optional[int] = None
	id: Optional[int] = None
	created_at: Optional[str] = None

	def stored(self, id, created_at) -> "NoteRecord":
		return replace(self, id=id, created_at=created_at)

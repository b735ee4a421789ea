# pathwise/repositories/memory.py
"""
In-memory entity store.

One MemStore is built per application (see pathwise.main.create_app) and
handed to routes through the get_store dependency; nothing here is a
module-level singleton, so tests get isolation by building a fresh app.

Semantics:
- ids are per-kind, start at 1, and are consumed on every create attempt
  (including creates staged in a discarded batch); they are never reused.
- updates are shallow merges: a nested object in the partial replaces the
  stored one wholesale.
- list operations filter by user_id and return insertion order.
- only skills can be deleted; nothing cascades.
"""
import itertools
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Type

from pydantic import BaseModel

from pathwise.models.entities import Career, Chat, Job, LearningPath, Record, Resume, Skill, User

ENTITY_TYPES: Dict[str, Type[Record]] = {
    "user": User,
    "career": Career,
    "skill": Skill,
    "resume": Resume,
    "job": Job,
    "learning_path": LearningPath,
    "chat": Chat,
}


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _fields_of(record: BaseModel) -> Dict[str, Any]:
    # attribute-level copy: keeps excluded fields (password) and nested models intact
    return {name: getattr(record, name) for name in type(record).model_fields}


class Batch:
    """Creates staged inside MemStore.batch(); committed together or not at all."""

    def __init__(self, store: "MemStore"):
        self._store = store
        self._pending: List[Tuple[str, Record]] = []

    def create(self, kind: str, data: Mapping[str, Any]) -> Record:
        record = self._store._build(kind, data)
        self._pending.append((kind, record))
        return record

    def create_skill(self, data: Mapping[str, Any]) -> Skill:
        return self.create("skill", data)

    def create_learning_path(self, data: Mapping[str, Any]) -> LearningPath:
        return self.create("learning_path", data)

    def staged(self, kind: str) -> List[Record]:
        return [r for k, r in self._pending if k == kind]

    def skills_for_user(self, user_id: int) -> List[Skill]:
        """Committed skills plus the ones staged in this batch."""
        staged = [s for s in self.staged("skill") if s.user_id == user_id]
        return self._store.list_skills_by_user(user_id) + staged

    def _commit(self) -> None:
        # staged() keeps answering after the commit so callers can return what was written
        for kind, record in self._pending:
            self._store._tables[kind][record.id] = record


class MemStore:
    def __init__(self):
        self._tables: Dict[str, Dict[int, Record]] = {kind: {} for kind in ENTITY_TYPES}
        self._counters = {kind: itertools.count(1) for kind in ENTITY_TYPES}

    # -- generic helpers -------------------------------------------------

    def _build(self, kind: str, data: Mapping[str, Any]) -> Record:
        model = ENTITY_TYPES[kind]
        # the id is taken before validation so a rejected payload still burns it
        record_id = next(self._counters[kind])
        return model.model_validate({**data, "id": record_id, "created_at": _now()})

    def _create(self, kind: str, data: Mapping[str, Any]) -> Record:
        record = self._build(kind, data)
        self._tables[kind][record.id] = record
        return record

    def _get(self, kind: str, record_id: int) -> Optional[Record]:
        return self._tables[kind].get(record_id)

    def _list_by_user(self, kind: str, user_id: int) -> List[Record]:
        return [r for r in self._tables[kind].values() if r.user_id == user_id]

    def _update(self, kind: str, record_id: int, partial: Mapping[str, Any]) -> Optional[Record]:
        current = self._tables[kind].get(record_id)
        if current is None:
            return None
        merged = _fields_of(current)
        merged.update({k: v for k, v in partial.items() if k not in ("id", "created_at")})
        updated = ENTITY_TYPES[kind].model_validate(merged)
        self._tables[kind][record_id] = updated
        return updated

    def count(self, kind: str) -> int:
        return len(self._tables[kind])

    @contextmanager
    def batch(self) -> Iterator[Batch]:
        """
        Stage several creates and commit them atomically.

        Nothing is written if the with-block raises. The commit itself
        does not await, so no other request can observe a half-applied batch.
        """
        b = Batch(self)
        yield b
        b._commit()

    # -- users -----------------------------------------------------------

    def create_user(self, data: Mapping[str, Any]) -> User:
        return self._create("user", data)

    def get_user(self, user_id: int) -> Optional[User]:
        return self._get("user", user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self._tables["user"].values() if u.username == username), None)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._tables["user"].values() if u.email == email), None)

    def update_user(self, user_id: int, partial: Mapping[str, Any]) -> Optional[User]:
        return self._update("user", user_id, partial)

    # -- careers ---------------------------------------------------------

    def create_career(self, data: Mapping[str, Any]) -> Career:
        return self._create("career", data)

    def get_career(self, career_id: int) -> Optional[Career]:
        return self._get("career", career_id)

    def list_careers_by_user(self, user_id: int) -> List[Career]:
        return self._list_by_user("career", user_id)

    # -- skills ----------------------------------------------------------

    def create_skill(self, data: Mapping[str, Any]) -> Skill:
        return self._create("skill", data)

    def get_skill(self, skill_id: int) -> Optional[Skill]:
        return self._get("skill", skill_id)

    def list_skills_by_user(self, user_id: int) -> List[Skill]:
        return self._list_by_user("skill", user_id)

    def list_skills_by_category(self, user_id: int, category: str) -> List[Skill]:
        return [s for s in self.list_skills_by_user(user_id) if s.category == category]

    def update_skill(self, skill_id: int, partial: Mapping[str, Any]) -> Optional[Skill]:
        return self._update("skill", skill_id, partial)

    def delete_skill(self, skill_id: int) -> bool:
        return self._tables["skill"].pop(skill_id, None) is not None

    # -- resumes ---------------------------------------------------------

    def create_resume(self, data: Mapping[str, Any]) -> Resume:
        return self._create("resume", data)

    def get_resume(self, resume_id: int) -> Optional[Resume]:
        return self._get("resume", resume_id)

    def list_resumes_by_user(self, user_id: int) -> List[Resume]:
        return self._list_by_user("resume", user_id)

    def update_resume(self, resume_id: int, partial: Mapping[str, Any]) -> Optional[Resume]:
        return self._update("resume", resume_id, partial)

    # -- jobs ------------------------------------------------------------

    def create_job(self, data: Mapping[str, Any]) -> Job:
        return self._create("job", data)

    def get_job(self, job_id: int) -> Optional[Job]:
        return self._get("job", job_id)

    def list_jobs_by_user(self, user_id: int) -> List[Job]:
        return self._list_by_user("job", user_id)

    def list_saved_jobs_by_user(self, user_id: int) -> List[Job]:
        return [j for j in self.list_jobs_by_user(user_id) if j.is_saved]

    def update_job(self, job_id: int, partial: Mapping[str, Any]) -> Optional[Job]:
        return self._update("job", job_id, partial)

    # -- learning paths --------------------------------------------------

    def create_learning_path(self, data: Mapping[str, Any]) -> LearningPath:
        return self._create("learning_path", data)

    def get_learning_path(self, path_id: int) -> Optional[LearningPath]:
        return self._get("learning_path", path_id)

    def list_learning_paths_by_user(self, user_id: int) -> List[LearningPath]:
        return self._list_by_user("learning_path", user_id)

    def update_learning_path(self, path_id: int, partial: Mapping[str, Any]) -> Optional[LearningPath]:
        return self._update("learning_path", path_id, partial)

    # -- chats -----------------------------------------------------------

    def create_chat(self, data: Mapping[str, Any]) -> Chat:
        return self._create("chat", data)

    def get_chat(self, chat_id: int) -> Optional[Chat]:
        return self._get("chat", chat_id)

    def list_chats_by_user(self, user_id: int) -> List[Chat]:
        return self._list_by_user("chat", user_id)

    def update_chat(self, chat_id: int, partial: Mapping[str, Any]) -> Optional[Chat]:
        return self._update("chat", chat_id, partial)

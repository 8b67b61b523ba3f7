"""Prompt template storage with an in-memory cache.

Each (type, role) slot is backed by two files:
  - a read-only default under `default_dir/<type>/<role>.txt`
  - an optional admin override under `override_dir/<type>/<role>.txt`

Updates write the override, reset deletes it, so a reset always brings back
the shipped default.
"""

import logging
import threading
from pathlib import Path

from candidate_matcher.core.config import RatingConfig
from candidate_matcher.core.errors import PromptManagementError
from candidate_matcher.models.schemas import PromptDto, PromptRole, PromptType
from candidate_matcher.prompts.templates import apply_rating_range

logger = logging.getLogger(__name__)

SLOTS: list[tuple[PromptType, PromptRole]] = [
    (PromptType.SUMMARY, PromptRole.system),
    (PromptType.SUMMARY, PromptRole.user),
    (PromptType.RATING, PromptRole.system),
    (PromptType.RATING, PromptRole.user),
]


def parse_type(value: str | PromptType) -> PromptType:
    if isinstance(value, PromptType):
        return value
    try:
        return PromptType(value.upper())
    except (ValueError, AttributeError) as exc:
        raise PromptManagementError(f"Invalid prompt type: {value}") from exc


def parse_role(value: str | PromptRole) -> PromptRole:
    if isinstance(value, PromptRole):
        return value
    try:
        return PromptRole(value.lower())
    except (ValueError, AttributeError) as exc:
        raise PromptManagementError(f"Invalid prompt role: {value}") from exc


def _read(path: Path) -> str:
    return "\n".join(path.read_text(encoding="utf-8").splitlines())


class PromptStore:
    def __init__(self, default_dir: Path, override_dir: Path, rating: RatingConfig):
        self.default_dir = Path(default_dir)
        self.override_dir = Path(override_dir)
        self.rating = rating
        self._cache: dict[tuple[PromptType, PromptRole], str] = {}
        self._sources: dict[tuple[PromptType, PromptRole], Path] = {}
        self._locks = {slot: threading.Lock() for slot in SLOTS}
        self.refresh()

    # --- paths ---

    def default_path(self, type_: PromptType, role: PromptRole) -> Path:
        return self.default_dir / type_.value.lower() / f"{role.value}.txt"

    def override_path(self, type_: PromptType, role: PromptRole) -> Path:
        return self.override_dir / type_.value.lower() / f"{role.value}.txt"

    # --- loading ---

    def _load_slot(self, slot: tuple[PromptType, PromptRole]) -> None:
        override = self.override_path(*slot)
        source = override if override.is_file() else self.default_path(*slot)
        try:
            content = _read(source)
        except OSError:
            # An empty prompt still lets the matcher run, degraded
            logger.exception("Failed to read prompt %s/%s from %s", slot[0].value, slot[1].value, source)
            content = ""
        self._cache[slot] = content
        self._sources[slot] = source

    def refresh(self) -> None:
        """Reload every slot from storage."""
        for slot in SLOTS:
            self._locks[slot].acquire()
        try:
            for slot in SLOTS:
                self._load_slot(slot)
        finally:
            for slot in reversed(SLOTS):
                self._locks[slot].release()
        logger.info("Prompt cache reloaded")

    # --- reads ---

    def _dto(self, slot: tuple[PromptType, PromptRole]) -> PromptDto:
        source = self._sources[slot]
        return PromptDto(
            type=slot[0],
            role=slot[1],
            content=self._cache[slot],
            file_path=str(source),
            cached=True,
            edited=source == self.override_path(*slot),
        )

    def get_all_prompts(self) -> list[PromptDto]:
        return [self._dto(slot) for slot in SLOTS]

    def get_prompt(self, type_: str | PromptType, role: str | PromptRole) -> PromptDto:
        return self._dto((parse_type(type_), parse_role(role)))

    def get_content(self, type_: PromptType, role: PromptRole) -> str:
        return self._cache[(type_, role)]

    def render_system(self, type_: PromptType) -> str:
        return self._render(type_, PromptRole.system)

    def render_user(self, type_: PromptType) -> str:
        return self._render(type_, PromptRole.user)

    def _render(self, type_: PromptType, role: PromptRole) -> str:
        content = self._cache[(type_, role)]
        if type_ is PromptType.RATING:
            return apply_rating_range(content, self.rating)
        return content

    # --- writes ---

    def update_prompt(
        self,
        type_: str | PromptType,
        role: str | PromptRole,
        content: str | None,
    ) -> PromptDto:
        slot = (parse_type(type_), parse_role(role))
        if content is None:
            raise PromptManagementError("Prompt content cannot be null")
        path = self.override_path(*slot)
        with self._locks[slot]:
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(content, encoding="utf-8")
            except OSError as exc:
                logger.error("Failed to update prompt %s/%s: %s", slot[0].value, slot[1].value, exc)
                raise PromptManagementError(f"Failed to update prompt: {exc}") from exc
            self._cache[slot] = content
            self._sources[slot] = path
            logger.debug("Written prompt content to %s", path)
        logger.info("Successfully updated prompt: %s/%s", slot[0].value, slot[1].value)
        return self._dto(slot)

    def reset_prompt(self, type_: str | PromptType, role: str | PromptRole) -> PromptDto:
        """Drop the admin override and go back to the shipped default."""
        slot = (parse_type(type_), parse_role(role))
        with self._locks[slot]:
            try:
                self.override_path(*slot).unlink(missing_ok=True)
            except OSError as exc:
                logger.error("Failed to reset prompt %s/%s: %s", slot[0].value, slot[1].value, exc)
                raise PromptManagementError(f"Failed to reset prompt: {exc}") from exc
            self._load_slot(slot)
        logger.info("Successfully reset prompt: %s/%s", slot[0].value, slot[1].value)
        return self._dto(slot)

"""
Mood entry validation.

Validates check-in fields before anything reaches the store.
"""

from typing import Any, Dict, Optional, Tuple

from serenspace.schemas.mood import Emotion

# (is_valid, error_message, error_code)
ValidationResult = Tuple[bool, Optional[str], Optional[str]]

_OK: ValidationResult = (True, None, None)


class MoodValidator:
    """
    Validates mood entry fields against allowed ranges and values.
    """

    SCORE_RANGE: Tuple[int, int] = (1, 10)

    EMOTIONS = tuple(e.value for e in Emotion)

    MAX_NOTE_LENGTH = 1000
    MAX_TAGS = 20
    MAX_TAG_LENGTH = 50

    @classmethod
    def validate_new_entry(cls, fields: Dict[str, Any]) -> ValidationResult:
        """
        Validate a new check-in. Score and emotion are required.

        Args:
            fields: dict with score, emotion and optional note/tags

        Returns:
            tuple of (is_valid, error_message, error_code)
        """
        for check in (
            cls.validate_score(fields.get("score")),
            cls.validate_emotion(fields.get("emotion")),
            cls.validate_note(fields.get("note")),
            cls.validate_tags(fields.get("tags")),
        ):
            if not check[0]:
                return check

        return _OK

    @classmethod
    def validate_update(cls, fields: Dict[str, Any]) -> ValidationResult:
        """Validate only the fields present in a partial update."""
        validators = {
            "score": cls.validate_score,
            "emotion": cls.validate_emotion,
            "note": cls.validate_note,
            "tags": cls.validate_tags,
        }

        for name, value in fields.items():
            validator = validators.get(name)
            if validator is None:
                continue
            result = validator(value)
            if not result[0]:
                return result

        return _OK

    @classmethod
    def validate_score(cls, score: Any) -> ValidationResult:
        min_val, max_val = cls.SCORE_RANGE
        message = f"Score must be between {min_val} and {max_val}"

        # bool is an int subclass
        if isinstance(score, bool) or not isinstance(score, int):
            return False, message, "INVALID_SCORE"

        if score < min_val or score > max_val:
            return False, message, "INVALID_SCORE"

        return _OK

    @classmethod
    def validate_emotion(cls, emotion: Any) -> ValidationResult:
        if not emotion:
            return False, "Emotion is required", "MISSING_EMOTION"

        if emotion not in cls.EMOTIONS:
            return (
                False,
                f"Emotion must be one of: {', '.join(cls.EMOTIONS)}",
                "INVALID_EMOTION",
            )

        return _OK

    @classmethod
    def validate_note(cls, note: Any) -> ValidationResult:
        if note is None:
            return _OK

        if not isinstance(note, str):
            return False, "Note must be a string", "INVALID_NOTE"

        if len(note.strip()) > cls.MAX_NOTE_LENGTH:
            return False, f"Note cannot exceed {cls.MAX_NOTE_LENGTH} characters", "INVALID_NOTE"

        return _OK

    @classmethod
    def validate_tags(cls, tags: Any) -> ValidationResult:
        if tags is None:
            return _OK

        if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
            return False, "Tags must be a list of strings", "INVALID_TAGS"

        if len(tags) > cls.MAX_TAGS:
            return False, f"At most {cls.MAX_TAGS} tags are allowed", "INVALID_TAGS"

        if any(len(t) > cls.MAX_TAG_LENGTH for t in tags):
            return False, f"Tags cannot exceed {cls.MAX_TAG_LENGTH} characters", "INVALID_TAGS"

        return _OK

    @staticmethod
    def normalize_tags(tags: Optional[list]) -> list:
        """Trim, drop blanks and de-duplicate while keeping order."""
        if not tags:
            return []

        seen = []
        for tag in tags:
            cleaned = tag.strip()
            if cleaned and cleaned not in seen:
                seen.append(cleaned)
        return seen

"""Enum types for the candidate registry data model."""

import enum


# --- Candidate Enums ---

class Sex(str, enum.Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class EntityType(str, enum.Enum):
    HUMAN = "Human"
    SCANNER = "Scanner"


# --- System Enums ---

class SettingValueType(str, enum.Enum):
    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    JSON = "json"

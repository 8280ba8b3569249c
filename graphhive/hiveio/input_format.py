from __future__ import annotations

from typing import Optional

from pydantic import ValidationError

from graphhive.core.conf import Configuration
from graphhive.core.errors import ConfigurationError

from .models import HiveInputDescription

INPUT_PROFILE_PREFIX = "hiveio.input.profile."


class HiveApiInputFormat:
    """Reads a Hive table described by the input profile it is bound to."""

    def __init__(self, profile_id: Optional[str] = None):
        self.my_profile_id = profile_id

    def set_my_profile_id(self, profile_id: str) -> None:
        self.my_profile_id = profile_id

    def input_desc(self, conf: Configuration) -> HiveInputDescription:
        if not self.my_profile_id:
            raise ConfigurationError("HiveApiInputFormat: profile id not set")
        return self.get_profile_input_desc(conf, self.my_profile_id)

    @staticmethod
    def set_profile_input_desc(conf: Configuration, input_desc: HiveInputDescription, profile_id: str) -> None:
        if not profile_id:
            raise ConfigurationError("Profile id must be non-empty")
        conf.set(INPUT_PROFILE_PREFIX + profile_id, input_desc.model_dump_json())

    @staticmethod
    def get_profile_input_desc(conf: Configuration, profile_id: str) -> HiveInputDescription:
        raw = conf.get(INPUT_PROFILE_PREFIX + profile_id)
        if raw is None:
            raise ConfigurationError(f"No input profile registered under {profile_id!r}")
        try:
            return HiveInputDescription.model_validate_json(raw)
        except ValidationError as e:
            raise ConfigurationError(f"Corrupt input profile {profile_id!r}: {e}") from e

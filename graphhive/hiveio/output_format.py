from __future__ import annotations

from typing import Optional

from pydantic import ValidationError

from graphhive.core.conf import Configuration
from graphhive.core.errors import ConfigurationError, MetastoreError

from .metastore import metastore_for
from .models import HiveOutputDescription

OUTPUT_PROFILE_PREFIX = "hiveio.output.profile."


class HiveApiOutputFormat:
    """Writes to a Hive table (partition) described by its output profile."""

    def __init__(self, profile_id: Optional[str] = None):
        self.my_profile_id = profile_id

    def set_my_profile_id(self, profile_id: str) -> None:
        self.my_profile_id = profile_id

    def output_desc(self, conf: Configuration) -> HiveOutputDescription:
        if not self.my_profile_id:
            raise ConfigurationError("HiveApiOutputFormat: profile id not set")
        return self.get_profile_output_desc(conf, self.my_profile_id)

    @staticmethod
    def init_profile(conf: Configuration, output_desc: HiveOutputDescription, profile_id: str) -> None:
        """
        Validate the output table against the catalog and store the profile.

        Raises MetastoreError when the table is unknown or the partition
        values do not line up with the table's partition keys.
        """
        if not profile_id:
            raise ConfigurationError("Profile id must be non-empty")

        schema = metastore_for(conf).get_table_schema(output_desc.table_desc)
        expected = [k.lower() for k in schema.partition_key_names()]
        given = [k.lower() for k in output_desc.partition_values]

        if expected and not given:
            raise MetastoreError(
                f"Table {output_desc.table_desc} is partitioned by {expected}; no partition values given"
            )
        if given and not expected:
            raise MetastoreError(f"Table {output_desc.table_desc} is not partitioned; got {given}")
        if sorted(given) != sorted(expected):
            raise MetastoreError(
                f"Partition values {given} do not match partition keys {expected} of {output_desc.table_desc}"
            )

        conf.set(OUTPUT_PROFILE_PREFIX + profile_id, output_desc.model_dump_json())

    @staticmethod
    def get_profile_output_desc(conf: Configuration, profile_id: str) -> HiveOutputDescription:
        raw = conf.get(OUTPUT_PROFILE_PREFIX + profile_id)
        if raw is None:
            raise ConfigurationError(f"No output profile registered under {profile_id!r}")
        try:
            return HiveOutputDescription.model_validate_json(raw)
        except ValidationError as e:
            raise ConfigurationError(f"Corrupt output profile {profile_id!r}: {e}") from e

"""Hive rows -> graph (HiveToVertex / HiveToEdge and their input formats)."""

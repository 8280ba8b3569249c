"""Glue between Giraph-style graph jobs and Hive tables."""

__version__ = "0.3.0"

"""Graph -> Hive rows (VertexToHive and the vertex output format)."""

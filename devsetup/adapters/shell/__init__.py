"""Shell adapters — process execution."""

"""WorldWater HTTP API."""

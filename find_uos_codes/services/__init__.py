"""Pipeline stages: extraction, resolution, assembly and output projection."""

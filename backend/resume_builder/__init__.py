"""Resume builder: component library, resume aggregates and export."""

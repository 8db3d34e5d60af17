"""Graph input decoding, model building, styling and rendering."""

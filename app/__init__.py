"""GreenThumb plant care reminder backend."""

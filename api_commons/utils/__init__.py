"""String and date helpers."""

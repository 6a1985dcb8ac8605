"""PyQt6 shell: canvas, main window and application bootstrap."""

"""Text and JSON rendering of decoded streams."""

"""Label and marker placement for the stations of a line."""

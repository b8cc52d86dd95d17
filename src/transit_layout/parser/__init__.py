"""Network documents and the records they describe."""

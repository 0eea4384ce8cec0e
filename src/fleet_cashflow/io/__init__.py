"""Import / export and persistence collaborators."""

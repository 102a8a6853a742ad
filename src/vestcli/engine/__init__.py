"""Document engine: lays content blocks out as lines and scrolls them on a terminal surface."""

"""Screenshot extraction pipeline: modes, typed results and the request boundary."""

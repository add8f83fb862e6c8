"""Core identity, variable, constraint and graph machinery."""

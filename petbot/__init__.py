"""Pet assistant whose tools are bound to the calling user at request time."""

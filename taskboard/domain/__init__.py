"""Domain layer for the task board.

Pure domain code: entities, value objects, domain events and the
collaborator contracts (repositories, event bus) the application layer
is written against. Nothing here performs I/O.
"""

"""Infrastructure Layer — database, disk storage, MIME database and logging.

Invariants:
    - Infrastructure implements the Protocols in core/repository_protocols.py
    - Raw OS and driver errors are mapped to core/errors.py types before leaving

Design Decisions:
    - Blocking disk calls run in worker threads (asyncio.to_thread)
"""

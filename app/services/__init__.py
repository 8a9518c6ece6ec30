"""Services Layer — the /fs request pipeline and its database-backed stores.

Invariants:
    - One module per pipeline stage (identity, authorization, listing, preview)
    - Stages depend on core/repository_protocols.py, never on concrete stores

Design Decisions:
    - fs_pipeline.py sequences the stages; routes only wire collaborators
"""

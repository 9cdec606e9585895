"""Infrastructure layer — typed repositories, JSON storage, the warehouse.

The repository is pure in-memory state: it never logs, prints, or
performs I/O. Storage and the warehouse own everything touching disk.
"""

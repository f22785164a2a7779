"""Batched thread and version facet retrieval for the moderation platform.

Import :mod:`modthreads.main` for the standalone FastAPI application; the
services and routers can be used on their own without it.
"""

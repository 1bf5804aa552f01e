from abs_investigator.queries.builder import build_queries

__all__ = ["build_queries"]

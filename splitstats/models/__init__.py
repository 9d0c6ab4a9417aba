from splitstats.models.schemas import AlternativeSummary  # noqa: F401

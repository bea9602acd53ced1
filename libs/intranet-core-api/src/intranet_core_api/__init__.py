"""Company intranet core: models, repositories, access engine and services."""

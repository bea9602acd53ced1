"""Shared plumbing for the intranet core libraries."""

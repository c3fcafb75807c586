"""Pipeline flows."""

from .orchestrator import run_scrape, scrape_flow

__all__ = ["run_scrape", "scrape_flow"]

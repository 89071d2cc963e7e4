"""Periodic scrape scheduling on an APScheduler background thread."""

import logging
from datetime import datetime

from apscheduler.schedulers.background import BackgroundScheduler

logger = logging.getLogger(__name__)

SCRAPE_JOB_ID = "scrape-logs"


def start_scheduler(scraper, interval_seconds: int) -> BackgroundScheduler:
    """Run scraper.scrape_once now, then every *interval_seconds*.

    Cycles never overlap: a run that is still in progress when the next one
    is due makes APScheduler skip (and coalesce) the late run.
    """
    scheduler = BackgroundScheduler()
    scheduler.add_job(
        scraper.scrape_once,
        "interval",
        seconds=interval_seconds,
        id=SCRAPE_JOB_ID,
        next_run_time=datetime.now(),
        max_instances=1,
        coalesce=True,
    )
    scheduler.start()
    logger.info("Starting periodic log scraping every %ds", interval_seconds)
    return scheduler

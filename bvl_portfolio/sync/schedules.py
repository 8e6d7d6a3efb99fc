from celery.schedules import crontab

beat_schedule = {
    # Pull intraday BVL quotes every 15 minutes while the exchange is open (Lima time), Mon-Fri
    "reconcile_daily_quotes": {
        "task": "bvl_sync.reconcile_daily_quotes",
        "schedule": crontab(minute="*/15", hour="9-16", day_of_week="mon-fri"),
        "args": (),
    },
}

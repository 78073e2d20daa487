from .scheduler import ManualScheduler, ScheduledAction, Scheduler, TkScheduler  # noqa: F401

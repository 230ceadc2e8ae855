from .logo_tasks import generate_logos, sweep_stale_jobs

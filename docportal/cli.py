"""CLI utilities."""

import click
from sqlalchemy.orm import Session

from docportal.config import settings
from docportal.core.filters import build_filters
from docportal.core.stats import StatsEngine, StatsError
from docportal.core.store import StatsStore
from docportal.database import Base, SessionLocal, engine
from docportal.logging_config import setup_logging
from docportal.seed import seed_from_yaml


@click.group()
def cli():
    """Document portal statistics CLI."""
    setup_logging()


@cli.command()
def init_db():
    """Create database tables."""
    import docportal.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    click.echo("Tables created")


@cli.command()
@click.argument("yaml_file", type=click.Path(exists=True, dir_okay=False))
def seed(yaml_file: str):
    """Seed a demo corpus from YAML."""
    db: Session = SessionLocal()
    try:
        added = seed_from_yaml(db, yaml_file)
        click.echo(", ".join(f"{count} {name}" for name, count in added.items()) + " added")
    finally:
        db.close()


@cli.command()
@click.option("--from-date", default=None, help="Start date (YYYY-MM-DD)")
@click.option("--to-date", default=None, help="End date (YYYY-MM-DD), inclusive")
@click.option("--search", default=None, help="Free-text search over users and documents")
@click.option("--category", default=None, help="Exact document category")
@click.option("--tags", default=None, help="Comma-separated tags")
def stats(from_date: str, to_date: str, search: str, category: str, tags: str):
    """Print the admin statistics report as JSON."""
    filters = build_filters(from_date=from_date, to_date=to_date, search=search, category=category, tags=tags)
    db: Session = SessionLocal()
    try:
        store = StatsStore(db, timeout_ms=settings.stats_query_timeout_ms)
        report = StatsEngine(
            store,
            feed_limit=settings.stats_feed_limit,
            short_circuit=settings.stats_short_circuit,
        ).build_report(filters)
        click.echo(report.model_dump_json(by_alias=True, indent=2))
    except StatsError as e:
        raise click.ClickException(f"Failed to build report: {e}")
    finally:
        db.close()


@cli.command()
def dashboard():
    """Print the admin dashboard tiles as JSON."""
    db: Session = SessionLocal()
    try:
        store = StatsStore(db, timeout_ms=settings.stats_query_timeout_ms)
        report = StatsEngine(store).build_dashboard()
        click.echo(report.model_dump_json(by_alias=True, indent=2))
    except StatsError as e:
        raise click.ClickException(f"Failed to build dashboard: {e}")
    finally:
        db.close()


if __name__ == "__main__":
    cli()

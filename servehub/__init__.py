"""ServeHub scheduler: monthly ministry rosters and worship song lineups.

Modules:
- constants: ministries, priority tiers, song genres and tempos
- roster: immutable Person/Song snapshots and generator result types
- config: rule sets with defaults and YAML/JSON config loading
- engine: role assignment scheduler, lineup composer and orchestrator
- reporting: plain-text transcripts and summaries
- services: schedule validation, conflict detection and analytics
- domain: SQLAlchemy models and repositories (roster and catalog provider)
- io: CSV import/export
- cli: command-line interface entrypoints
"""

__all__ = [
    "constants",
    "roster",
    "config",
    "engine",
    "reporting",
    "services",
    "domain",
    "io",
    "cli",
]

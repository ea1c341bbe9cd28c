import sys

from aulas import create_app, db
from aulas.services.seed_service import SeedService

app = create_app()

with app.app_context():
    db.create_all()

    data_dir = sys.argv[1] if len(sys.argv) > 1 else None
    report = SeedService.seed_if_empty(data_dir)

    for row in report.skipped:
        print(f"Skipped {row.source} line {row.line}: {row.reason}")
    print(report.summary())

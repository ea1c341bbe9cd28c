from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from aulas.extensions import db
from aulas.models import DamageReport, Resource
from aulas.models.damage_report import STATUS_REPORTED
from aulas.services._helpers import require_fields, to_int, is_blank
from aulas.utils.errors import NotFoundError, StoreError


class DamageReportService:

    @staticmethod
    def report_damage(resource_id, description, photo=None):
        """Append a damage report against a resource. Reports are never edited here."""
        require_fields({'resourceId': resource_id, 'description': description},
                       'resourceId', 'description')
        resource_id = to_int(resource_id, 'resourceId')

        if not db.session.get(Resource, resource_id):
            raise NotFoundError('Resource not found')

        report = DamageReport(
            resource_id=resource_id,
            description=str(description).strip(),
            photo=None if is_blank(photo) else str(photo),
            status=STATUS_REPORTED
        )
        db.session.add(report)
        try:
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            current_app.logger.exception("Error saving damage report")
            raise StoreError()

        current_app.logger.info(f"Damage report {report.id} filed for resource {resource_id}")
        return report

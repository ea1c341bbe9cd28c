import csv
import io
import os
from collections import namedtuple
from datetime import datetime

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from aulas.extensions import db
from aulas.models import User, Room, Resource, DamageReport
from aulas.models.user import normalize_role
from aulas.models.room import STATE_FREE, STATE_OCCUPIED
from aulas.models.resource import STATUS_ACTIVE
from aulas.models.damage_report import STATUS_REPORTED
from aulas.services.auth_service import AuthService
from aulas.utils.errors import StoreError

# English file name first, then the name used by the legacy exports
SEED_SOURCES = {
    'users': ('users.csv', 'Usuarios.csv'),
    'rooms': ('rooms.csv', 'Aulas.csv'),
    'resources': ('resources.csv', 'Recursos.csv'),
    'damage_reports': ('damage_reports.csv', 'Danios.csv'),
}

# Accepted headers per field, compared lowercased
COLUMNS = {
    'name': ('name', 'nombre'),
    'email': ('email', 'correo'),
    'password': ('password', 'contrasena', 'contraseña'),
    'role': ('role', 'rol'),
    'id': ('id',),
    'module': ('module', 'modulo', 'módulo'),
    'state': ('state', 'estado'),
    'occupied_by': ('occupied_by', 'ocupado_por'),
    'room_id': ('room_id', 'aula_id'),
    'type': ('type', 'tipo'),
    'code': ('code', 'codigo', 'código'),
    'status': ('status', 'estado'),
    'resource_id': ('resource_id', 'recurso_id'),
    'description': ('description', 'descripcion', 'descripción'),
    'photo': ('photo', 'foto'),
    'created_at': ('created_at', 'fecha', 'date'),
}

ROOM_STATES = {
    'free': STATE_FREE,
    'libre': STATE_FREE,
    'occupied': STATE_OCCUPIED,
    'ocupada': STATE_OCCUPIED,
    'ocupado': STATE_OCCUPIED,
}

# Spreadsheet exports of the legacy files are often Windows-1252; latin-1 decodes any byte
CSV_ENCODINGS = ('utf-8-sig', 'cp1252', 'latin-1')

RowResult = namedtuple('RowResult', ['source', 'line', 'accepted', 'reason'])


class SeedReport:
    """Outcome of a seed run: one RowResult per CSV row that was read."""

    def __init__(self):
        self.seeded = False
        self.results = []

    def accept(self, source, line):
        self.results.append(RowResult(source, line, True, None))

    def skip(self, source, line, reason):
        current_app.logger.warning(f"Seed {source} line {line} skipped: {reason}")
        self.results.append(RowResult(source, line, False, reason))

    @property
    def skipped(self):
        return [r for r in self.results if not r.accepted]

    def accepted_count(self, source):
        return sum(1 for r in self.results if r.accepted and r.source == source)

    def summary(self):
        if not self.seeded:
            return "Seed skipped: users already present."
        parts = [f"{source}={self.accepted_count(source)}" for source in SEED_SOURCES]
        return f"Seed completed ({', '.join(parts)}, skipped={len(self.skipped)})."


def _clean(value):
    if value is None:
        return ''
    return str(value).strip()


def _field(row, name):
    for key in COLUMNS[name]:
        if key in row:
            return _clean(row[key])
    return ''


def _parse_int(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _parse_rows(text, delimiter):
    reader = csv.DictReader(io.StringIO(text), delimiter=delimiter, strict=True)
    rows = []
    for row in reader:
        normalized = {_clean(k).lower(): v for k, v in row.items() if k is not None}
        rows.append((reader.line_num, normalized))
    return reader.fieldnames or [], rows


def read_csv(path):
    """
    Read a CSV file into ``(line_number, row)`` pairs with lowercased headers.
    Comma-delimited parsing is tried first. Files that fail to parse, or that
    come out as a single ``a;b;c`` column, are read again with ``;``.
    Non UTF-8 files are decoded with the fallbacks in ``CSV_ENCODINGS``.
    """
    text = None
    for encoding in CSV_ENCODINGS:
        try:
            with open(path, encoding=encoding, newline='') as fh:
                text = fh.read()
            break
        except UnicodeDecodeError:
            current_app.logger.warning(f"{os.path.basename(path)} is not {encoding}, trying next encoding")

    try:
        fieldnames, rows = _parse_rows(text, ',')
    except csv.Error:
        fieldnames, rows = [], None

    if rows is None or (len(fieldnames) == 1 and ';' in fieldnames[0]):
        fieldnames, rows = _parse_rows(text, ';')
    return rows


class SeedService:

    @staticmethod
    def find_source(data_dir, source):
        for filename in SEED_SOURCES[source]:
            path = os.path.join(data_dir, filename)
            if os.path.exists(path):
                return path
        return None

    @staticmethod
    def load_source(data_dir, source):
        path = SeedService.find_source(data_dir, source)
        if not path:
            current_app.logger.info(f"No {source} CSV in {data_dir}, nothing to import")
            return []
        return read_csv(path)

    @staticmethod
    def seed_if_empty(data_dir=None):
        """
        Populate an empty store from the CSV files in ``data_dir``.
        Does nothing if any user exists. Bad rows are skipped and reported,
        everything else lands in a single commit.
        """
        report = SeedReport()
        if db.session.query(User.id).first() is not None:
            current_app.logger.info(report.summary())
            return report

        data_dir = data_dir or current_app.config['SEED_DATA_DIR']
        try:
            SeedService._seed_users(SeedService.load_source(data_dir, 'users'), report)
            SeedService._seed_rooms(SeedService.load_source(data_dir, 'rooms'), report)
            db.session.flush()
            SeedService._seed_resources(SeedService.load_source(data_dir, 'resources'), report)
            db.session.flush()
            SeedService._seed_damage_reports(SeedService.load_source(data_dir, 'damage_reports'), report)
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            current_app.logger.exception("Seed failed, nothing was imported")
            raise StoreError()

        report.seeded = True
        current_app.logger.info(report.summary())
        return report

    @staticmethod
    def _seed_users(rows, report):
        seen = set()
        default_password = current_app.config['DEFAULT_SEED_PASSWORD']
        for line, row in rows:
            name = _field(row, 'name')
            email = _field(row, 'email')
            if not name or not email:
                report.skip('users', line, 'missing name or email')
                continue
            if email in seen:
                report.skip('users', line, f'duplicate email {email}')
                continue
            seen.add(email)

            db.session.add(User(
                name=name,
                email=email,
                password_hash=AuthService.hash_password(_field(row, 'password') or default_password),
                role=normalize_role(_field(row, 'role'))
            ))
            report.accept('users', line)

    @staticmethod
    def _seed_rooms(rows, report):
        seen = {room_id for (room_id,) in db.session.query(Room.id)}
        for line, row in rows:
            room_id = _parse_int(_field(row, 'id'))
            name = _field(row, 'name')
            module = _field(row, 'module')
            if room_id is None:
                report.skip('rooms', line, 'missing or invalid id')
                continue
            if not name or not module:
                report.skip('rooms', line, 'missing name or module')
                continue
            if room_id in seen:
                report.skip('rooms', line, f'duplicate room id {room_id}')
                continue
            seen.add(room_id)

            room = Room(id=room_id, name=name, module=module)
            occupant = _field(row, 'occupied_by')
            if ROOM_STATES.get(_field(row, 'state').lower()) == STATE_OCCUPIED and occupant:
                room.occupy(occupant)
            else:
                room.free()
            db.session.add(room)
            report.accept('rooms', line)

    @staticmethod
    def _seed_resources(rows, report):
        room_ids = {room_id for (room_id,) in db.session.query(Room.id)}
        for line, row in rows:
            room_id = _parse_int(_field(row, 'room_id'))
            resource_type = _field(row, 'type')
            code = _field(row, 'code')
            if room_id is None or not resource_type or not code:
                report.skip('resources', line, 'missing room id, type or code')
                continue
            if room_id not in room_ids:
                report.skip('resources', line, f'unknown room {room_id}')
                continue

            status = _field(row, 'status')
            if not status or status.lower() == 'activo':
                status = STATUS_ACTIVE
            db.session.add(Resource(room_id=room_id, type=resource_type, code=code, status=status))
            report.accept('resources', line)

    @staticmethod
    def _seed_damage_reports(rows, report):
        resource_ids = {resource_id for (resource_id,) in db.session.query(Resource.id)}
        for line, row in rows:
            resource_id = _parse_int(_field(row, 'resource_id'))
            description = _field(row, 'description')
            if resource_id is None or not description:
                report.skip('damage_reports', line, 'missing resource id or description')
                continue
            if resource_id not in resource_ids:
                report.skip('damage_reports', line, f'unknown resource {resource_id}')
                continue

            created_at = None
            raw_date = _field(row, 'created_at')
            if raw_date:
                try:
                    created_at = datetime.fromisoformat(raw_date)
                except ValueError:
                    report.skip('damage_reports', line, f'invalid date {raw_date}')
                    continue

            status = _field(row, 'status')
            if not status or status.lower() == 'reportado':
                status = STATUS_REPORTED
            db.session.add(DamageReport(
                resource_id=resource_id,
                description=description,
                photo=_field(row, 'photo') or None,
                status=status,
                created_at=created_at or datetime.utcnow()
            ))
            report.accept('damage_reports', line)

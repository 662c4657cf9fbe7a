import logging

from utitool.lsregister import parse_dump
from utitool.records import AppRecord

logger = logging.getLogger(__name__)


class Aggregator:
    """Collects parsed records into one entry per UTI and, on request, per app."""

    def __init__(self):
        self.utis = {}
        self.apps = {}

    def add(self, record):
        existing = self.utis.get(record.uti)
        if existing is None:
            self.utis[record.uti] = record
            return

        for app in record.apps:
            existing.add_app(app)
        for extension in record.extensions:
            existing.add_extension(extension)
        for mime_type in record.mime_types:
            existing.add_mime_type(mime_type)
        # Parents are concatenated as-is, so repeated merges repeat them
        existing.parents.extend(record.parents)
        if not existing.ref:
            existing.ref = record.ref

    def add_all(self, records):
        for record in records:
            self.add(record)
        return self

    def build_app_index(self):
        self.apps = {}
        for uti_record in self.utis.values():
            for app in uti_record.apps:
                entry = self.apps.setdefault(app.name, AppRecord(name=app.name))
                entry.utis.append(uti_record.short_version())
        logger.info("Indexed %d apps", len(self.apps))
        return self.apps


def aggregate_dump(text, by_app=False):
    aggregator = Aggregator().add_all(parse_dump(text))
    if by_app:
        aggregator.build_app_index()
    return aggregator

"""Type lookups by UTI, file extension or file, answered from Launch Services data."""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from utitool.aggregate import Aggregator
from utitool.lsregister import RECORD_PREFIX, iter_fields, parse_dump, split_records
from utitool.process import run_process

logger = logging.getLogger(__name__)

FILENAME_EXTENSION = "public.filename-extension"
MIME_TYPE = "public.mime-type"
DYNAMIC_PREFIX = "dyn."
MDLS_PATH = "/usr/bin/mdls"

LOCALIZATION_PATTERN = re.compile(r'"([^"]+)" = "([^"]*)"')

# Extra mime types for UTIs that don't have them in lsregister
EXTRA_MIME_TYPES = {
    "com.apple.xar-archive": ["application/x-xar"],
    "com.apple.coreaudio-format": ["audio/x-caf"],
    "com.apple.xml-property-list": ["application/xml+plist"],
    "com.apple.binary-property-list": ["application/x-apple-plist", "application/x-plist"],
}


@dataclass
class TypeInfo:
    identifier: str
    description: Optional[str] = None
    declared: bool = False
    dynamic: bool = False
    tags: Dict[str, List[str]] = field(default_factory=dict)
    reference_url: Optional[str] = None

    @property
    def extensions(self):
        return self.tags.get(FILENAME_EXTENSION, [])

    @property
    def mime_types(self):
        return self.tags.get(MIME_TYPE, [])


def parse_localized_description(desc):
    """Pick the English, or else the default, value from a localizedDescription field."""
    if not desc:
        return None
    # Entries without a value ("en" = ?) never match
    languages = dict(LOCALIZATION_PATTERN.findall(desc))
    if languages.get("en"):
        return languages["en"]
    return languages.get("LSDefaultLocalizedValue")


def _descriptions(text):
    descriptions = {}
    for raw in split_records(text):
        uti = None
        for key, value in iter_fields(raw):
            if key == RECORD_PREFIX:
                tokens = value.split()
                uti = tokens[0] if tokens else None
            elif key == "localizedDescription" and uti and uti not in descriptions:
                desc = parse_localized_description(value)
                if desc:
                    descriptions[uti] = desc
    return descriptions


class TypeRegistry:
    def __init__(self, types=None):
        self._types = dict(types or {})

    def __len__(self):
        return len(self._types)

    @classmethod
    def from_dump(cls, text):
        # Every declared type counts here, hardware ones included
        aggregator = Aggregator().add_all(parse_dump(text, hardware_filter=None))
        descriptions = _descriptions(text)

        types = {}
        for uti, record in aggregator.utis.items():
            mime_types = list(record.mime_types)
            for mime_type in EXTRA_MIME_TYPES.get(uti, []):
                if mime_type not in mime_types:
                    mime_types.append(mime_type)

            tags = {}
            if record.extensions:
                tags[FILENAME_EXTENSION] = [extension[1:] for extension in record.extensions]
            if mime_types:
                tags[MIME_TYPE] = mime_types

            types[uti] = TypeInfo(
                identifier=uti,
                description=descriptions.get(uti),
                declared=True,
                dynamic=uti.startswith(DYNAMIC_PREFIX),
                tags=tags,
                reference_url=record.ref or None,
            )
        logger.info("Loaded %d types", len(types))
        return cls(types)

    def lookup(self, identifier):
        info = self._types.get(identifier)
        if info is None and identifier.startswith(DYNAMIC_PREFIX) and len(identifier) > len(DYNAMIC_PREFIX):
            info = TypeInfo(identifier=identifier, dynamic=True)
        return info

    def types_for_extension(self, extension):
        extension = extension.lstrip(".").lower()
        if not extension:
            return []
        matches = [
            info for info in self._types.values()
            if extension in (item.lower() for item in info.extensions)
        ]
        return sorted(matches, key=lambda info: info.identifier)


def file_type_identifier(path, runner=None):
    runner = runner or run_process
    ret = runner(MDLS_PATH, ["-raw", "-name", "kMDItemContentType", path])
    if ret.status != 0:
        logger.debug("mdls failed for %s: %s", path, ret.error.strip())
        return None

    uti = ret.output.strip()
    if not uti or uti == "(null)":
        return None
    return uti

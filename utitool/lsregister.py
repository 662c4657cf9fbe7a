"""Parse the text dump produced by `lsregister -dump`.

A typical UTI record in the dump:

    --------------------------------------------------------------------------------
    type id:                    com.apple.realitycomposerpro (0x343d0)
    bundle:                     Reality Composer Pro (0x62c4)
    uti:                        com.apple.realitycomposerpro
    localizedDescription:       "Base" = ?, "en" = ?, "LSDefaultLocalizedValue" = "Reality Composer Pro Swift Package"
    flags:                      active  apple-internal  exported  trusted (0000000000000055)
    icons:                      0 values (272384 (0x42800))
    {
    }
    conforms to:                com.apple.package, public.composite-content, public.directory, public.item
    tags:                       .realitycomposerpro, application/octet-stream

Bundle, claim and plugin blocks share the same delimiter and are skipped.
"""

import logging
import os

from utitool.errors import EnvironmentFailure
from utitool.hardware import is_hardware_noise
from utitool.process import run_process
from utitool.records import AppRecord, UtiRecord
from utitool.scanner import Position, Scanner

logger = logging.getLogger(__name__)

LSREGISTER_PATH = "/System/Library/Frameworks/CoreServices.framework/Frameworks/LaunchServices.framework/Versions/A/Support/lsregister"

RECORD_PREFIX = "type id"
KEY_VALUE_SEPARATOR = ":"
RECORD_DELIMITER = "-" * 80
PLACEHOLDER_UTI = "unknown"
HARDWARE_BUNDLE = "CoreTypes"


def dump_registry(runner=None):
    runner = runner or run_process
    path = os.environ.get("UTITOOL_LSREGISTER") or LSREGISTER_PATH

    logger.info("Dumping lsregister")
    ret = runner(path, ["-dump"])
    if ret.status != 0:
        raise EnvironmentFailure(ret.error.strip() or f"{path} exited with status {ret.status}", ret.status)
    return ret.output


def split_records(text):
    scanner = Scanner(text)
    while not scanner.at_end():
        start = scanner.mark()
        key = scanner.scan_up_to(KEY_VALUE_SEPARATOR)
        if key and RECORD_DELIMITER in key:
            # Block without a separator: resume at its closing delimiter
            scanner.reset(Position(start.index + key.index(RECORD_DELIMITER)))
            scanner.skip_n(len(RECORD_DELIMITER))
            continue

        if not key or key.strip() != RECORD_PREFIX:
            # Not a UTI record, so move on to the next block
            scanner.scan_up_to(RECORD_DELIMITER)
            scanner.skip_n(len(RECORD_DELIMITER))
            continue

        scanner.reset(start)
        record = scanner.scan_up_to(RECORD_DELIMITER)
        scanner.skip_n(len(RECORD_DELIMITER))
        if record:
            yield record


def iter_fields(raw):
    for line in raw.split("\n"):
        if KEY_VALUE_SEPARATOR not in line:
            continue
        # Split once so URL values keep their scheme separator
        key, value = line.split(KEY_VALUE_SEPARATOR, 1)
        yield key.strip(), value.strip()


def _split_list(value):
    return [item for item in value.split(", ") if item]


def parse_record(raw, hardware_filter=is_hardware_noise):
    lines = raw.split("\n")
    if len(lines) < 2:
        logger.debug("Skipping short record: %r", raw)
        return None

    record = None
    discarded = False

    def current():
        nonlocal record
        if record is None:
            logger.debug("Field before '%s' line, using placeholder UTI", RECORD_PREFIX)
            record = UtiRecord(uti=PLACEHOLDER_UTI)
        return record

    for key, value in iter_fields(raw):
        if key == RECORD_PREFIX:
            tokens = value.split()
            record = UtiRecord(uti=tokens[0] if tokens else PLACEHOLDER_UTI)
            discarded = False
        elif discarded:
            continue
        elif key == "bundle":
            name = value.split(" (")[0]
            current().add_app(AppRecord(name=name))
            if name == HARDWARE_BUNDLE and hardware_filter is not None and hardware_filter(record.uti):
                logger.debug("Ignoring hardware UTI %s", record.uti)
                record = None
                discarded = True
        elif key == "reference URL":
            if record is not None:
                record.ref = value
        elif key == "conforms to":
            if record is not None:
                record.parents.extend(_split_list(value))
        elif key == "tags":
            entry = current()
            for tag in _split_list(value):
                if tag.startswith("."):
                    entry.add_extension(tag)
                elif "/" in tag:
                    entry.add_mime_type(tag)

    return record


def parse_dump(text, hardware_filter=is_hardware_noise):
    logger.info("Parsing lsregister")
    count = 0
    for raw in split_records(text):
        record = parse_record(raw, hardware_filter=hardware_filter)
        if record is not None:
            count += 1
            yield record
    logger.info("Parsed %d UTI records", count)

"""Reports for single files, file extensions and UTIs."""

import os
import sys

from utitool.stdio import report_error
from utitool.typeinfo import DYNAMIC_PREFIX, FILENAME_EXTENSION, MIME_TYPE, file_type_identifier

TAG_LABELS = {
    FILENAME_EXTENSION: "file extensions",
    MIME_TYPE: "MIME types",
}


def get_full_path(path):
    return os.path.abspath(os.path.expanduser(path))


def _description(info, inset, out):
    print(f"{' ' * inset}Content type: {info.description or info.identifier}", file=out)


def _tags(info, tag_class, inset, out):
    label = TAG_LABELS[tag_class]
    values = info.tags.get(tag_class)
    if values:
        print(f"{' ' * inset}{label[0].upper()}{label[1:]} registered: {', '.join(values)}", file=out)
    else:
        print(f"{' ' * inset}No {label} registered", file=out)


def _status(info, inset, out):
    if info.declared:
        print(f"{' ' * inset}UTI is registered with the system", file=out)
    elif info.dynamic:
        print(f"{' ' * inset}UTI is dynamically assigned", file=out)


def _reference(info, inset, out, palette):
    if info.reference_url:
        print(f"{' ' * inset}Reference URL: {palette.underline}{info.reference_url}{palette.normal}", file=out)


def get_extension_data(extension, registry, out, palette):
    extn = extension[1:] if extension.startswith(".") else extension

    types = registry.types_for_extension(extn)
    if not types:
        print(f"No info available for extension .{extn}", file=out)
        return 0

    print(f"{palette.bold}UTI information for file extension {palette.highlight}.{extn}{palette.normal}", file=out)
    if len(types) > 1:
        for index, info in enumerate(types, start=1):
            # Line the details up under the identifier
            inset = len(str(index)) + 2
            print(f"{index}. {palette.bold}{info.identifier}{palette.normal}", file=out)
            _description(info, inset, out)
            if info.tags:
                _tags(info, MIME_TYPE, inset, out)
            _reference(info, inset, out, palette)
            _status(info, inset, out)
    else:
        info = types[0]
        print(f"UTI: {palette.bold}{info.identifier}{palette.normal}", file=out)
        _description(info, 0, out)
        if info.tags:
            _tags(info, MIME_TYPE, 0, out)
        _reference(info, 0, out, palette)
        _status(info, 0, out)
    return 0


def get_uti_data(uti, registry, out, palette, show_head=True):
    info = registry.lookup(uti)
    if info is None:
        print(f"UTI {palette.bold}{uti}{palette.normal} is not known to the system", file=out)
        return 0

    if show_head:
        print(f"{palette.bold}Information for UTI {palette.highlight}{info.identifier}{palette.normal}", file=out)
    _description(info, 0, out)
    if info.tags:
        _tags(info, FILENAME_EXTENSION, 0, out)
        _tags(info, MIME_TYPE, 0, out)
    _status(info, 0, out)
    _reference(info, 0, out, palette)
    return 0


def get_file_data(path, out, palette, more=False, registry_loader=None, runner=None, err=None):
    """Report the UTI of one file. Returns False when the path could not be reported on."""
    err = err or sys.stderr
    path = get_full_path(path)

    if not os.path.exists(path):
        report_error(f"{path} is not a valid file reference", err, palette.coloured)
        return False
    if os.path.isdir(path):
        return True

    uti = file_type_identifier(path, runner=runner)
    if uti is None:
        report_error(f"Could not get UTI for {path}", err, palette.coloured)
        return False

    if more:
        print(f"UTI for {path}: {palette.emphasis}{uti}{palette.normal}", file=out)
        get_uti_data(uti, registry_loader(), out, palette, show_head=False)
        print("", file=out)
    else:
        # Spotlight only hands out declared or dyn. types, so no registry dump is needed here
        status = "UTI was dynamically assigned" if uti.startswith(DYNAMIC_PREFIX) else "UTI is registered with the system"
        print(f"UTI for {path}: {palette.emphasis}{uti}{palette.normal} ({status})", file=out)
    return True

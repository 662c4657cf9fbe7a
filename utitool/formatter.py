import json
from dataclasses import dataclass

from colorama import Fore, Style

from utitool.errors import SerializationFailure

# colorama has no underline constant
UNDERLINE = "\033[4m"


@dataclass
class OutputOptions:
    json_output: bool = False
    by_app: bool = False
    colour: bool = True


@dataclass(frozen=True)
class Palette:
    bold: str = Style.BRIGHT
    normal: str = Style.RESET_ALL
    underline: str = UNDERLINE
    highlight: str = Fore.YELLOW
    emphasis: str = Fore.MAGENTA

    @property
    def coloured(self):
        return bool(self.normal)

    @classmethod
    def plain(cls):
        return cls(bold="", normal="", underline="", highlight="", emphasis="")

    @classmethod
    def for_options(cls, options):
        return cls() if options.colour else cls.plain()


def listify(items):
    return ", ".join(items)


def _plural(label, items):
    return label if len(items) == 1 else label + "s"


def to_json(store):
    try:
        return json.dumps({key: value.to_dict() for key, value in store.items()}, sort_keys=True)
    except (TypeError, ValueError) as exc:
        raise SerializationFailure(f"Could not process Launch Services to JSON: {exc}") from exc


def format_utis(utis, palette):
    lines = []
    for key in sorted(utis):
        record = utis[key]
        lines.append(f"{palette.highlight}{palette.bold}{key}{palette.normal}")
        if record.extensions:
            lines.append(f"    {_plural('File extension', record.extensions)}: {listify(record.extensions)}")
        if record.mime_types:
            lines.append(f"    {_plural('Mime type', record.mime_types)}: {listify(record.mime_types)}")
        if record.parents:
            lines.append(f"    Conforms to: {listify(record.parents)}")
        if record.ref:
            lines.append(f"    Reference Information: {palette.underline}{record.ref}{palette.normal}")

        apps = record.app_names()
        if apps:
            lines.append(f"    Claimed by: {listify(apps)}")
        else:
            lines.append("    Claimed by no apps")
    return lines


def format_apps(apps, palette):
    lines = []
    for key in sorted(apps):
        lines.append(f"{palette.highlight}{palette.bold}{key}{palette.normal} is associated with the following UTIs:")
        for uti in sorted(short.uti for short in apps[key].utis):
            lines.append(f"    {uti}")
    return lines


def write_registry(aggregator, options, stream):
    if options.by_app and not aggregator.apps:
        aggregator.build_app_index()
    store = aggregator.apps if options.by_app else aggregator.utis

    if options.json_output:
        # Encode fully before writing so a failure leaves no partial document
        text = to_json(store)
        stream.write(text + "\n")
        return

    palette = Palette.for_options(options)
    lines = format_apps(store, palette) if options.by_app else format_utis(store, palette)
    for line in lines:
        stream.write(line + "\n")

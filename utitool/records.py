from dataclasses import dataclass, field
from typing import List


@dataclass
class UtiRecordShort:
    """A UTI without its apps, embedded in AppRecord to avoid cycles."""

    uti: str = ""
    extensions: List[str] = field(default_factory=list)
    mime_types: List[str] = field(default_factory=list)
    parents: List[str] = field(default_factory=list)

    def to_dict(self):
        return {
            "uti": self.uti,
            "extensions": list(self.extensions),
            "mimeTypes": list(self.mime_types),
            "parents": list(self.parents),
        }


@dataclass
class AppRecord:
    name: str = ""
    utis: List[UtiRecordShort] = field(default_factory=list)

    def to_dict(self):
        return {"name": self.name, "utis": [uti.to_dict() for uti in self.utis]}


@dataclass
class UtiRecord:
    uti: str = ""
    apps: List[AppRecord] = field(default_factory=list)
    extensions: List[str] = field(default_factory=list)
    mime_types: List[str] = field(default_factory=list)
    parents: List[str] = field(default_factory=list)
    ref: str = ""

    def app_names(self):
        return [app.name for app in self.apps]

    def add_app(self, app):
        if app.name not in self.app_names():
            self.apps.append(app)

    def add_extension(self, extension):
        if extension not in self.extensions:
            self.extensions.append(extension)

    def add_mime_type(self, mime_type):
        if mime_type not in self.mime_types:
            self.mime_types.append(mime_type)

    def short_version(self):
        return UtiRecordShort(
            uti=self.uti,
            extensions=list(self.extensions),
            mime_types=list(self.mime_types),
            parents=list(self.parents),
        )

    def to_dict(self):
        return {
            "uti": self.uti,
            "apps": [app.to_dict() for app in self.apps],
            "extensions": list(self.extensions),
            "mimeTypes": list(self.mime_types),
            "parents": list(self.parents),
            "ref": self.ref,
        }

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from pkgcompat.models.manifest import Manifest, PackageReference


class EnvironmentModel(BaseModel):
    platform: str
    arch: str
    versions: Dict[str, str] = Field(default_factory=dict)


class ManifestIn(BaseModel):
    name: str
    version: str
    # left untyped: values of the wrong shape are ignored by the checker, not rejected
    os: Optional[Any] = None
    cpu: Optional[Any] = None
    engines: Optional[Any] = None
    optional: bool = False

    def to_manifest(self) -> Manifest:
        return Manifest(
            name=self.name,
            version=self.version,
            os=self.os,
            cpu=self.cpu,
            engines=self.engines,
            reference=PackageReference(optional=self.optional),
        )


class CheckRequest(BaseModel):
    environment: Optional[EnvironmentModel] = None
    manifests: List[ManifestIn]


class Message(BaseModel):
    level: str
    message: str


class ManifestResult(BaseModel):
    name: str
    version: str
    decision: str
    ignored: bool
    violations: List[str] = Field(default_factory=list)


class Failure(BaseModel):
    name: str
    version: str
    categories: List[str]
    messages: List[str]


class CheckResponse(BaseModel):
    compatible: bool
    environment: EnvironmentModel
    results: List[ManifestResult]
    failure: Optional[Failure] = None
    messages: List[Message] = Field(default_factory=list)

from fastapi import APIRouter
from pkgcompat.models.schemas import (
    CheckRequest,
    CheckResponse,
    EnvironmentModel,
    Failure,
    ManifestResult,
    Message,
)
from pkgcompat.services.compatibility import PackageCompatibility
from pkgcompat.services.environment import Environment
from pkgcompat.services.reporter import BufferedReporter
from pkgcompat.services.resolver import StaticResolver


router = APIRouter()


@router.get("/environment", response_model=EnvironmentModel)
def host_environment():
    return Environment.from_host().to_dict()


@router.post("/check", response_model=CheckResponse)
def check_manifests(payload: CheckRequest):
    # 1) Environment: explicit one from the payload, otherwise the host
    if payload.environment is not None:
        environment = Environment(
            platform=payload.environment.platform,
            arch=payload.environment.arch,
            versions=payload.environment.versions,
        )
    else:
        environment = Environment.from_host()

    # 2) Manifests in the order they were sent
    manifests = [m.to_manifest() for m in payload.manifests]

    # 3) Batch check, stopping at the first rejected manifest
    reporter = BufferedReporter()
    checker = PackageCompatibility(environment, StaticResolver(manifests), reporter)
    outcome = checker.run()

    # 4) Build the response
    # results follow manifest order; manifests after a rejection have none
    results = [
        ManifestResult(
            name=r.name,
            version=r.version,
            decision=r.decision.value,
            ignored=m.reference.ignore,
            violations=[v.message for v in r.violations],
        )
        for m, r in zip(manifests, outcome.results)
    ]

    failure = None
    if outcome.failure is not None:
        failure = Failure(
            name=outcome.failure.name,
            version=outcome.failure.version,
            categories=[c.value for c in outcome.failure.categories],
            messages=outcome.failure.messages,
        )

    return CheckResponse(
        compatible=outcome.compatible,
        environment=EnvironmentModel(**environment.to_dict()),
        results=results,
        failure=failure,
        messages=[Message(level=level, message=msg) for level, msg in reporter.get_buffer()],
    )

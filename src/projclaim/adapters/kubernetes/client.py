"""Resource store speaking to the Kubernetes custom-resource API over HTTP."""

from __future__ import annotations

import ssl
from logging import getLogger
from typing import TYPE_CHECKING, Final, Self

import httpx
from httpx_retries import Retry, RetryTransport

from projclaim.adapters.manifests import API_VERSION, from_manifest, merge_manifest, to_manifest
from projclaim.config import KubernetesConfig, RetryPolicy, get_kubernetes_config
from projclaim.domain.errors import AlreadyExistsError, ConflictError, NotFoundError, StoreError
from projclaim.domain.model import ResourceKind

if TYPE_CHECKING:
    from types import TracebackType

    from projclaim.adapters.manifests import Manifest
    from projclaim.domain.model import NamespacedName, Resource

log = getLogger(__name__)

PLURALS: Final[dict[ResourceKind, str]] = {
    ResourceKind.PROJECT_CLAIM: "projectclaims",
    ResourceKind.PROJECT_REFERENCE: "projectreferences",
}


def build_retry(policy: RetryPolicy) -> Retry:
    return Retry(
        total=policy.total,
        backoff_factor=policy.backoff_factor,
        max_backoff_wait=policy.max_backoff_wait,
        respect_retry_after_header=policy.respect_retry_after_header,
        allowed_methods=tuple(policy.allowed_methods),
        status_forcelist=tuple(policy.status_forcelist),
        backoff_jitter=policy.backoff_jitter,
    )


def _tls_verify(config: KubernetesConfig) -> ssl.SSLContext | bool:
    if not config.verify_tls:
        return False
    if config.ca_cert_path:
        return ssl.create_default_context(cafile=config.ca_cert_path)
    return True


def build_http_client(config: KubernetesConfig) -> httpx.Client:
    """Return an authenticated client with transport-level retries."""

    transport = RetryTransport(
        transport=httpx.HTTPTransport(verify=_tls_verify(config)),
        retry=build_retry(config.retry),
    )
    return httpx.Client(
        base_url=config.api_url,
        headers={
            "Authorization": f"Bearer {config.token}",
            "Accept": "application/json",
        },
        timeout=config.timeout_seconds,
        transport=transport,
    )


class KubernetesResourceStore:
    """``ResourceStore`` over ``/apis/gcp.managed.openshift.io/v1alpha1``.

    The API server already implements finalizers, the status sub-resource and
    resourceVersion conflicts; this class only maps HTTP outcomes onto the
    store error taxonomy.
    """

    def __init__(
        self,
        *,
        config: KubernetesConfig | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        if client is None:
            client = build_http_client(config or get_kubernetes_config())
        self._client = client
        # last manifest seen per record; writes are merged into it so fields
        # owned by other clients (labels, annotations, ownerReferences) survive
        self._observed: dict[tuple[ResourceKind, NamespacedName], Manifest] = {}

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def get[TResource: Resource](self, kind: type[TResource], key: NamespacedName) -> TResource:
        response = self._request("GET", kind.KIND, key, _item_path(kind.KIND, key))
        payload = response.json()
        self._observed[(kind.KIND, key)] = payload
        return from_manifest(kind, payload)

    def create(self, record: Resource) -> None:
        manifest = to_manifest(record)
        metadata = manifest["metadata"]
        metadata.pop("resourceVersion", None)
        metadata.pop("deletionTimestamp", None)
        response = self._request(
            "POST",
            record.kind,
            record.key,
            _collection_path(record.kind, record.metadata.namespace),
            json=manifest,
        )
        self._stamp(record, response)

    def update(self, record: Resource) -> None:
        response = self._request(
            "PUT",
            record.kind,
            record.key,
            _item_path(record.kind, record.key),
            json=self._outgoing(record),
        )
        self._stamp(record, response)

    def update_status(self, record: Resource) -> None:
        response = self._request(
            "PUT",
            record.kind,
            record.key,
            f"{_item_path(record.kind, record.key)}/status",
            json=self._outgoing(record),
        )
        self._stamp(record, response)

    def delete(self, record: Resource) -> None:
        self._request("DELETE", record.kind, record.key, _item_path(record.kind, record.key))

    def _request(
        self,
        method: str,
        kind: ResourceKind,
        key: NamespacedName,
        path: str,
        *,
        json: Manifest | None = None,
    ) -> httpx.Response:
        try:
            response = self._client.request(method, path, json=json)
        except httpx.TransportError as exc:
            raise StoreError(f"{method} {path} failed: {exc}", kind=kind, key=key) from exc

        if response.is_success:
            return response

        message = f"{method} {kind} {key} failed with {response.status_code}: {_reason(response)}"
        if response.status_code == httpx.codes.NOT_FOUND:
            raise NotFoundError(message, kind=kind, key=key)
        if response.status_code == httpx.codes.CONFLICT:
            if method == "POST":
                raise AlreadyExistsError(message, kind=kind, key=key)
            raise ConflictError(message, kind=kind, key=key)
        log.error(message)
        raise StoreError(message, kind=kind, key=key)

    def _outgoing(self, record: Resource) -> Manifest:
        observed = self._observed.get((record.kind, record.key))
        return merge_manifest(observed or {}, to_manifest(record))

    def _stamp(self, record: Resource, response: httpx.Response) -> None:
        payload = response.json()
        self._observed[(record.kind, record.key)] = payload
        persisted = from_manifest(type(record), payload)
        record.metadata.resource_version = persisted.metadata.resource_version


def _collection_path(kind: ResourceKind, namespace: str) -> str:
    return f"/apis/{API_VERSION}/namespaces/{namespace}/{PLURALS[kind]}"


def _item_path(kind: ResourceKind, key: NamespacedName) -> str:
    return f"{_collection_path(kind, key.namespace)}/{key.name}"


def _reason(response: httpx.Response) -> str:
    """Return the ``message`` of a Kubernetes ``Status`` body, or the raw text."""

    try:
        payload = response.json()
    except ValueError:
        return response.text
    if isinstance(payload, dict) and "message" in payload:
        return str(payload["message"])  # pyright: ignore[reportUnknownArgumentType]
    return response.text


if TYPE_CHECKING:
    from projclaim.domain.ports import ResourceStore

    _store_check: ResourceStore = KubernetesResourceStore(client=httpx.Client())

from collections.abc import Mapping
from typing import Any

import httpx

from shelter.api.base import BaseRecordsClient
from shelter.api.exceptions import (
    CollaboratorError,
    CollaboratorNetworkError,
    CollaboratorRejectedError,
    RecordNotFoundError,
)
from shelter.entities import EntityType
from shelter.interchange.fields import DomainRecord
from shelter.workflow.stats import ALL_STATUSES

_SINGLE_RECORD_KEYS = ("inquiry", "animal", "application", "volunteer", "data")
PAGE_SIZE = 100


class HttpRecordsClient(BaseRecordsClient):
    """Records client built on the shelter REST API.

    The bearer token is passed in explicitly; nothing is read from ambient state.

    The API's inquiry status route updates the linked animal itself, so
    ``syncs_animal_status`` is set and no client-side sync hook is attached.
    """

    syncs_animal_status = True

    def __init__(
        self,
        *,
        base_url: str,
        api_token: str,
        timeout_seconds: int,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        headers = {"Content-Type": "application/json"}
        if api_token:
            headers["Authorization"] = f"Bearer {api_token}"
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout_seconds,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def create_record(self, entity: EntityType, record: DomainRecord) -> DomainRecord:
        payload = self._request("POST", entity.collection_path, json=record)
        return _unwrap_record(payload)

    def update_record_status(
        self,
        entity: EntityType,
        record_id: str,
        new_status: str,
        notes: str | None = None,
    ) -> DomainRecord:
        body: dict[str, Any] = {"status": new_status}
        if notes is not None:
            body["adminNotes"] = notes
        payload = self._request("PUT", entity.status_path(record_id), json=body)
        return _unwrap_record(payload)

    def fetch_records(
        self,
        entity: EntityType,
        filters: Mapping[str, Any] | None = None,
    ) -> list[DomainRecord]:
        params = {
            key: value
            for key, value in (filters or {}).items()
            if value is not None and not (key == "status" and value in ALL_STATUSES)
        }
        if not entity.paginated:
            payload = self._request("GET", entity.collection_path, params=params)
            return _unwrap_list(payload, entity)

        records: list[DomainRecord] = []
        page = 1
        while True:
            payload = self._request(
                "GET",
                entity.collection_path,
                params={**params, "page": page, "limit": PAGE_SIZE},
            )
            batch = _unwrap_list(payload, entity)
            records.extend(batch)
            if not batch or page >= _page_count(payload):
                return records
            page += 1

    def find_record(self, entity: EntityType, record_id: str) -> DomainRecord:
        if not entity.has_record_endpoint:
            return super().find_record(entity, record_id)
        return _unwrap_record(self._request("GET", entity.record_path(record_id)))

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = self._client.request(method, path, **kwargs)
        except (httpx.ConnectError, httpx.TimeoutException) as exc:
            raise CollaboratorNetworkError(f"Records API network error: {exc}") from exc
        except httpx.HTTPError as exc:
            raise CollaboratorNetworkError(f"Records API transport error: {exc}") from exc

        if response.status_code == 404:
            raise RecordNotFoundError(f"{method} {path}: not found")
        if response.is_error:
            raise CollaboratorRejectedError(
                f"{method} {path} rejected with {response.status_code}: {response.text}",
                status_code=response.status_code,
            )
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise CollaboratorError(f"{method} {path}: invalid JSON response: {exc}") from exc


def _unwrap_record(payload: Any) -> DomainRecord:
    if not isinstance(payload, dict):
        raise CollaboratorError("Records API returned a non-object record")
    if "_id" in payload or "id" in payload:
        return payload
    for key in _SINGLE_RECORD_KEYS:
        nested = payload.get(key)
        if isinstance(nested, dict):
            return nested
    return payload


def _page_count(payload: Any) -> int:
    pagination = payload.get("pagination") if isinstance(payload, dict) else None
    if not isinstance(pagination, dict):
        return 1
    try:
        return int(pagination.get("total") or 1)
    except (TypeError, ValueError):
        return 1


def _unwrap_list(payload: Any, entity: EntityType) -> list[DomainRecord]:
    if isinstance(payload, dict):
        key = entity.list_key
        payload = payload.get(key) if key else payload.get("data")
    if not isinstance(payload, list):
        raise CollaboratorError(f"Records API returned no {entity.value} list")
    return [item for item in payload if isinstance(item, dict)]

"""Shopify Admin GraphQL implementation of the object staging contract.

Staged uploads are a two step protocol: ``stagedUploadsCreate`` reserves a
target (URL plus signed form parameters), the bytes are POSTed straight to
that target, and ``fileCreate`` turns the staged resource into a servable
file. No retries happen here; callers decide what to do with failures.
"""

from __future__ import annotations

import logging
from typing import Any, BinaryIO

import httpx

from banner_server.modules.banners.exceptions import (
    FinalizeFailed,
    ProviderRejected,
    ProviderUnavailable,
    UploadFailed,
)
from banner_server.modules.banners.staging import StagingParameter, StagingTarget

logger = logging.getLogger(__name__)

STAGED_UPLOADS_CREATE = """
mutation stagedUploadsCreate($input: [StagedUploadInput!]!) {
  stagedUploadsCreate(input: $input) {
    stagedTargets {
      url
      resourceUrl
      parameters { name value }
    }
    userErrors { field message }
  }
}
"""

FILE_CREATE = """
mutation fileCreate($files: [FileCreateInput!]!) {
  fileCreate(files: $files) {
    files {
      id
      alt
      preview { image { url } }
    }
    userErrors { field message }
  }
}
"""

UPLOAD_FIELD_NAME = "file"


def file_content_type(mime_type: str) -> str:
    return "IMAGE" if mime_type.lower().startswith("image/") else "FILE"


class ShopifyGraphQLError(Exception):
    """Raised when the GraphQL endpoint cannot produce a usable payload."""


class ShopifyStagingClient:
    """Talks to one shop with an already issued Admin API access token."""

    def __init__(self, http: httpx.AsyncClient, graphql_url: str, access_token: str) -> None:
        self._http = http
        self._graphql_url = graphql_url
        self._access_token = access_token

    async def request_staging_target(
        self,
        filename: str,
        mime_type: str,
        size_bytes: int,
    ) -> StagingTarget:
        variables = {
            "input": [
                {
                    "resource": "FILE",
                    "filename": filename,
                    "mimeType": mime_type,
                    "fileSize": str(size_bytes),
                    "httpMethod": "POST",
                }
            ]
        }
        try:
            data = await self._graphql(STAGED_UPLOADS_CREATE, variables)
        except (httpx.HTTPError, ShopifyGraphQLError) as exc:
            raise ProviderUnavailable(f"staged upload request failed: {exc}") from exc

        payload = data.get("stagedUploadsCreate") or {}
        user_errors = payload.get("userErrors") or []
        if user_errors:
            raise ProviderRejected("staged upload request rejected", user_errors)

        targets = payload.get("stagedTargets") or []
        target = targets[0] if targets else None
        if not target or not target.get("url"):
            raise ProviderUnavailable("no staged upload target returned")

        parameters = tuple(
            StagingParameter(name=str(param["name"]), value=str(param["value"]))
            for param in target.get("parameters") or []
        )
        return StagingTarget(
            url=target["url"],
            resource_url=target.get("resourceUrl") or "",
            parameters=parameters,
        )

    async def upload_binary(
        self,
        target: StagingTarget,
        content: BinaryIO,
        *,
        filename: str,
        mime_type: str,
    ) -> None:
        # Signed parameters must precede the file part; httpx writes data fields first.
        fields = {param.name: param.value for param in target.parameters}
        files = {UPLOAD_FIELD_NAME: (filename, content, mime_type)}
        try:
            response = await self._http.post(target.url, data=fields, files=files)
        except httpx.HTTPError as exc:
            raise UploadFailed(f"upload to staging target failed: {exc}") from exc
        if not response.is_success:
            raise UploadFailed(f"Upload failed: {response.status_code}", status_code=response.status_code)
        logger.debug("Uploaded %s to staging target %s", filename, target.url)

    async def finalize_object(
        self,
        target: StagingTarget,
        alt_text: str,
        *,
        mime_type: str,
    ) -> str:
        variables = {
            "files": [
                {
                    "alt": alt_text,
                    "contentType": file_content_type(mime_type),
                    "originalSource": target.resource_url,
                }
            ]
        }
        try:
            data = await self._graphql(FILE_CREATE, variables)
        except (httpx.HTTPError, ShopifyGraphQLError) as exc:
            raise FinalizeFailed(f"file create request failed: {exc}") from exc

        payload = data.get("fileCreate") or {}
        user_errors = payload.get("userErrors") or []
        if user_errors:
            raise FinalizeFailed("file create rejected", user_errors)

        files = payload.get("files") or []
        created = files[0] if files else None
        if not created:
            raise FinalizeFailed("provider returned no file for the staged upload")

        preview_url = ((created.get("preview") or {}).get("image") or {}).get("url")
        return preview_url or target.resource_url

    async def _graphql(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        response = await self._http.post(
            self._graphql_url,
            json={"query": query, "variables": variables},
            headers={"X-Shopify-Access-Token": self._access_token},
        )
        if not response.is_success:
            raise ShopifyGraphQLError(f"GraphQL endpoint answered {response.status_code}")
        try:
            body = response.json()
        except ValueError as exc:
            raise ShopifyGraphQLError("GraphQL endpoint returned invalid JSON") from exc
        if not isinstance(body, dict):
            raise ShopifyGraphQLError("GraphQL response was not an object")
        if body.get("errors"):
            raise ShopifyGraphQLError(str(body["errors"]))
        data = body.get("data")
        if not isinstance(data, dict):
            raise ShopifyGraphQLError("GraphQL response carried no data")
        return data

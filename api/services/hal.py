# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
HAL (Hypertext Application Language) response formatting utilities.
Resources carry affordance links that depend on the portal edit lock.
"""

from typing import Dict, List, Any, Optional

from models.responses import HalLink

ERROR_TYPE_BASE = "https://safety-portal.example/problems"


class HalLinkBuilder:
    """Builder for HAL links with proper URL construction."""

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip('/')

    def build_link(
        self,
        path: str,
        method: str = "GET",
        content_type: Optional[str] = None,
        title: Optional[str] = None
    ) -> HalLink:
        """Build a HAL link with proper URL construction."""
        return HalLink(
            href=f"{self.base_url}/{path.lstrip('/')}",
            method=method,
            type=content_type,
            title=title
        )

    def build_self_link(self, resource_path: str) -> HalLink:
        return self.build_link(resource_path, title="Self")

    def build_collection_link(self, collection_path: str) -> HalLink:
        return self.build_link(collection_path, title="Collection")

    def build_action_link(
        self,
        resource_path: str,
        action: str,
        method: str = "POST",
        title: Optional[str] = None
    ) -> HalLink:
        """Build action link for a resource."""
        return self.build_link(
            f"{resource_path}/{action}",
            method=method,
            content_type="application/json",
            title=title or action.title()
        )


class AffordanceLinkBuilder:
    """Builder for affordance links; mutations are only offered while unlocked."""

    COLLECTIONS = {
        "team": "/api/teams",
        "notice": "/api/notices",
        "vehicle": "/api/vehicles",
        "inspection": "/api/safety-inspections",
    }

    EDITABLE = {"team", "notice", "vehicle"}

    def __init__(self, base_url: str):
        self.link_builder = HalLinkBuilder(base_url)

    def build_affordances(
        self,
        resource_type: str,
        resource_id: str,
        locked: bool,
        data: Optional[Dict[str, Any]] = None
    ) -> Dict[str, HalLink]:
        links = {}
        collection_path = self.COLLECTIONS[resource_type]
        base_path = f"{collection_path}/{resource_id}"

        links['self'] = self.link_builder.build_self_link(base_path)
        links['collection'] = self.link_builder.build_collection_link(collection_path)

        if locked:
            return links

        if resource_type in self.EDITABLE:
            links['edit'] = self.link_builder.build_link(
                base_path,
                method="PUT",
                content_type="application/json",
                title=f"Edit {resource_type}"
            )
        links['delete'] = self.link_builder.build_link(
            base_path,
            method="DELETE",
            title=f"Delete {resource_type}"
        )

        if resource_type == "team":
            links['reset'] = self.link_builder.build_action_link(base_path, "reset", title="Reset team counters")
        elif resource_type == "notice" and data and data.get("category") == "equip_request":
            links['status'] = self.link_builder.build_action_link(base_path, "status", title="Change request status")

        return links


class HalResponseBuilder:
    """Main HAL response builder."""

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip('/')
        self.link_builder = HalLinkBuilder(base_url)
        self.affordance_builder = AffordanceLinkBuilder(base_url)

    def build_resource_response(
        self,
        data: Dict[str, Any],
        resource_type: str,
        locked: bool = False
    ) -> Dict[str, Any]:
        """Build a HAL resource response with affordance links."""
        response = dict(data)
        links = self.affordance_builder.build_affordances(resource_type, data["id"], locked, data)
        response['_links'] = {rel: link.model_dump(exclude_none=True) for rel, link in links.items()}
        return response

    def build_error_response(
        self,
        error_type: str,
        title: str,
        status: int,
        detail: str,
        instance: str,
        validation_errors: Optional[List[Dict[str, Any]]] = None
    ) -> Dict[str, Any]:
        """Build RFC 7807 compliant error response with HAL links."""
        error_response = {
            'type': f"{ERROR_TYPE_BASE}/{error_type}",
            'title': title,
            'status': status,
            'detail': detail,
            'instance': instance,
            'message': detail
        }

        if validation_errors:
            error_response['errors'] = validation_errors

        links = {
            'help': self.link_builder.build_link(
                f"/docs/errors#{error_type}",
                title="Error documentation"
            )
        }

        if error_type == "validation-error":
            links['schema'] = self.link_builder.build_link(
                "/openapi/openapi.json",
                title="API schema"
            )
        elif error_type in ("portal-locked", "invalid-pin"):
            links['lock'] = self.link_builder.build_link(
                "/api/settings/lock",
                title="Portal lock status"
            )

        error_response['_links'] = {rel: link.model_dump(exclude_none=True) for rel, link in links.items()}
        return error_response


class HalFormatter:
    """High-level HAL formatter with convenience methods."""

    def __init__(self, base_url: str):
        self.builder = HalResponseBuilder(base_url)

    def format_team(self, team: Dict[str, Any], locked: bool = False, rank: Optional[int] = None) -> Dict[str, Any]:
        """Format a team; list entries also carry their rank."""
        if rank is not None:
            team = dict(team, rank=rank)
        return self.builder.build_resource_response(team, "team", locked)

    def format_notice(self, notice: Dict[str, Any], locked: bool = False) -> Dict[str, Any]:
        return self.builder.build_resource_response(notice, "notice", locked)

    def format_vehicle(self, vehicle: Dict[str, Any], locked: bool = False) -> Dict[str, Any]:
        return self.builder.build_resource_response(vehicle, "vehicle", locked)

    def format_inspection(self, inspection: Dict[str, Any], locked: bool = False) -> Dict[str, Any]:
        return self.builder.build_resource_response(inspection, "inspection", locked)

    def format_error(self, error, instance: str) -> Dict[str, Any]:
        """Format a domain error as a problem document."""
        return self.builder.build_error_response(
            error.error_type,
            error.title,
            error.status_code,
            error.message,
            instance,
            getattr(error, "errors", None)
        )

    def format_server_error(self, instance: str, message: str = "An unexpected error occurred") -> Dict[str, Any]:
        return self.builder.build_error_response(
            "internal-server-error",
            "Internal Server Error",
            500,
            message,
            instance
        )


def create_hal_formatter(base_url: str) -> HalFormatter:
    """Create a HAL formatter instance."""
    return HalFormatter(base_url)

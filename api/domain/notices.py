# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Notice board rules.

Notices share one collection; the shape of ``content`` depends on the
category. Legacy clients send content as a JSON encoded string, which is
decoded here before validation.
"""

import json
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError

from models.entities import Notice
from models.enums import NoticeCategory, EquipmentRequestStatus, EquipmentCondition
from models.requests import CreateNoticeRequest, UpdateNoticeRequest, EquipmentRequestStatusUpdate
from models.responses import EquipmentItemSummary, EquipmentSummaryResponse
from models.base import utc_now
from domain.errors import ValidationError, from_pydantic

# Categories whose content is free text
TEXT_CATEGORIES = {
    NoticeCategory.NOTICE.value,
    NoticeCategory.RULE.value,
    NoticeCategory.EDU.value,
    NoticeCategory.EQUIPMENT.value,
    NoticeCategory.DIGITAL_BOARD.value,
}


def parse_content(category: str, content: Any) -> Dict[str, Any]:
    """
    Decode notice content into a mapping.

    Args:
        category: Notice category value
        content: Mapping, JSON string or plain text

    Returns:
        Content mapping, not yet validated against the category model
    """
    if content is None:
        return {}
    if isinstance(content, Mapping):
        return dict(content)
    if isinstance(content, str):
        try:
            decoded = json.loads(content)
        except ValueError:
            decoded = None
        if isinstance(decoded, dict):
            return decoded
        if category in TEXT_CATEGORIES:
            return {"text": content}
        raise ValidationError(
            f"Content for '{category}' must be a JSON object",
            [{"field": "content", "message": "Expected a JSON object", "type": "type_error"}]
        )
    raise ValidationError("Content must be an object or a string")


def _build(data: Dict[str, Any], message: str) -> Notice:
    try:
        return Notice(**data)
    except PydanticValidationError as e:
        raise from_pydantic(message, e)


def build_notice(fields: Any) -> Notice:
    """Validate a create payload and build the notice."""
    if not isinstance(fields, Mapping):
        raise ValidationError("Notice payload must be a JSON object")
    try:
        request = CreateNoticeRequest.model_validate(fields)
    except PydanticValidationError as e:
        raise from_pydantic("Invalid notice", e)

    return _build({
        "category": request.category,
        "title": request.title,
        "content": parse_content(request.category, request.content),
        "image_url": request.image_url,
    }, "Invalid notice")


def merge_notice(existing: Notice, fields: Any) -> Notice:
    """Apply a partial update; category never changes."""
    if not isinstance(fields, Mapping):
        raise ValidationError("Notice payload must be a JSON object")
    try:
        request = UpdateNoticeRequest.model_validate(fields)
    except PydanticValidationError as e:
        raise from_pydantic("Invalid notice update", e)

    data = existing.model_dump()
    changes = request.model_dump(exclude_unset=True)
    if changes.get("title") is not None:
        data["title"] = changes["title"]
    if changes.get("content") is not None:
        data["content"] = parse_content(existing.category, changes["content"])
    if "image_url" in changes:
        data["image_url"] = changes["image_url"]

    notice = _build(data, "Invalid notice update")
    notice.update_timestamp()
    return notice


def apply_request_status(existing: Notice, fields: Any) -> Notice:
    """
    Move an equipment request between requested and issued.

    Issuing requires the recipient's signature and stamps the issue time.
    Moving back to requested clears both.
    """
    if existing.category != NoticeCategory.EQUIP_REQUEST.value:
        raise ValidationError("Only equipment requests have a status")
    if not isinstance(fields, Mapping):
        raise ValidationError("Status payload must be a JSON object")
    try:
        update = EquipmentRequestStatusUpdate.model_validate(fields)
    except PydanticValidationError as e:
        raise from_pydantic("Invalid status update", e)

    content = dict(existing.content)
    if update.status == EquipmentRequestStatus.ISSUED.value:
        signature = (update.signature or "").strip()
        if not signature:
            raise ValidationError(
                "A signature is required to issue equipment",
                [{"field": "signature", "message": "Signature is required", "type": "missing"}]
            )
        content.update(status=update.status, signature=signature, issuedAt=utc_now())
    else:
        content.update(status=update.status, signature=None, issuedAt=None)

    data = existing.model_dump()
    data["content"] = content
    notice = _build(data, "Invalid status update")
    notice.update_timestamp()
    return notice


def summarize_equipment_status(
    notices: Iterable[Notice],
    item_category: Optional[str] = None,
    team: Optional[str] = None
) -> EquipmentSummaryResponse:
    """
    Aggregate team equipment inventories.

    Items are grouped by name across teams. The registered quantity counts
    items whose condition has been checked (good or bad).
    """
    grouped: Dict[str, EquipmentItemSummary] = {}

    for notice in notices:
        if notice.category != NoticeCategory.EQUIP_STATUS.value:
            continue
        inventory = notice.typed_content()
        if team and inventory.team != team:
            continue
        for item in inventory.items:
            if item_category and item.category != item_category:
                continue
            summary = grouped.get(item.name)
            if summary is None:
                summary = grouped[item.name] = EquipmentItemSummary(name=item.name, category=item.category)
            summary.total_quantity += item.quantity
            if item.condition == EquipmentCondition.GOOD.value:
                summary.good_qty += item.quantity
            elif item.condition == EquipmentCondition.BAD.value:
                summary.bad_qty += item.quantity
            summary.registered_qty = summary.good_qty + summary.bad_qty
            if inventory.team not in summary.teams:
                summary.teams.append(inventory.team)

    items: List[EquipmentItemSummary] = list(grouped.values())
    return EquipmentSummaryResponse(
        total_quantity=sum(item.total_quantity for item in items),
        registered_qty=sum(item.registered_qty for item in items),
        good_qty=sum(item.good_qty for item in items),
        bad_qty=sum(item.bad_qty for item in items),
        items=items,
    )

"""Audit trail: the application log of who did what, searchable by admins."""
from typing import Optional, Any, Dict

from django.contrib.auth import get_user_model
from django.db.models import Q

from clinic.models import AuditEvent

User = get_user_model()


def log_action(*, user: Optional[User]=None, action: str, object_type: Optional[str]=None, object_id: Optional[int]=None, detail: Optional[Dict[str, Any]]=None, using: Optional[str]=None) -> AuditEvent:
    return AuditEvent.objects.db_manager(using).create(
        user=user if isinstance(user, User) and user.pk else None,
        action=action,
        object_type=object_type, object_id=object_id,
        detail=detail or {},
    )


def search_events(q: Optional[str]=None, take: int=200) -> list[AuditEvent]:
    qs = AuditEvent.objects.select_related('user').order_by('-created_at', '-id')
    if q:
        qs = qs.filter(Q(action__icontains=q) | Q(object_type__icontains=q) | Q(user__username__icontains=q))
    take = min(1000, max(1, int(take or 200)))
    return list(qs[:take])


def clear_events() -> int:
    deleted, _ = AuditEvent.objects.all().delete()
    return deleted


def format_event(ev: AuditEvent) -> dict:
    return {
        'id': ev.id,
        'action': ev.action,
        'objectType': ev.object_type,
        'objectId': ev.object_id,
        'user': ev.user.username if ev.user else None,
        'detail': ev.detail,
        'createdAt': ev.created_at.isoformat(),
    }

import logging

from django.db import transaction
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.exceptions import NotFound
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.utils import paginate

from .models import MESSAGE_READ, MESSAGE_UNREAD, ContactMessage
from .serializers import (
    ContactMessageSerializer,
    ContactSerializer,
    MessageListQuerySerializer,
    MessageStatusSerializer,
)
from .tasks import send_contact_admin_notification, send_contact_auto_reply

logger = logging.getLogger(__name__)


def notify_contact_received(contact):
    """Queue the admin notification and the auto-reply. Both are best-effort."""
    for task in (send_contact_admin_notification, send_contact_auto_reply):
        try:
            task.delay(contact.pk)
        except Exception:
            logger.exception("Failed to queue %s for %s", task.name, contact.message_id)


def get_message_or_404(pk):
    contact = ContactMessage.objects.filter(pk=pk).first()
    if contact is None:
        raise NotFound("Contact message not found")
    return contact


class ContactView(APIView):
    """
    Contact API

    POST is the public contact form, GET lists received messages for admins.
    """

    def get_authenticators(self):
        if self.request.method == "POST":
            return []
        return super().get_authenticators()

    def get_permissions(self):
        if self.request.method == "POST":
            return [AllowAny()]
        return super().get_permissions()

    @extend_schema(
        summary="Send a contact message",
        request=ContactSerializer,
        responses={
            201: OpenApiResponse(description="Message stored, reference id returned as messageId"),
            400: OpenApiResponse(description="Validation failed"),
        },
        auth=[],
        tags=["Contact"],
    )
    def post(self, request):
        serializer = ContactSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        contact = serializer.save()
        logger.info("Contact message %s received from %s", contact.message_id, contact.email)

        transaction.on_commit(lambda: notify_contact_received(contact))

        return Response(
            {
                "success": True,
                "message": "Your message has been sent successfully. We will get back to you soon.",
                "data": {"messageId": contact.message_id},
            },
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(
        summary="List contact messages",
        parameters=[
            OpenApiParameter("status", str, enum=["unread", "read", "replied"]),
            OpenApiParameter("page", int),
            OpenApiParameter("limit", int),
        ],
        responses={200: ContactMessageSerializer(many=True)},
        tags=["Contact"],
    )
    def get(self, request):
        query = MessageListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        messages = ContactMessage.objects.all()
        if params.get("status"):
            messages = messages.filter(status=params["status"])
        rows, pagination = paginate(messages.order_by("-created_at", "-id"), params["page"], params["limit"])

        return Response(
            {"success": True, "data": ContactMessageSerializer(rows, many=True).data, "pagination": pagination},
            status=status.HTTP_200_OK,
        )


class ContactDetailView(APIView):
    """Reading an unread message marks it read."""

    @extend_schema(
        summary="Get a contact message",
        responses={200: ContactMessageSerializer, 404: OpenApiResponse(description="Contact message not found")},
        tags=["Contact"],
    )
    def get(self, request, pk):
        contact = get_message_or_404(pk)
        if contact.status == MESSAGE_UNREAD:
            contact.status = MESSAGE_READ
            contact.save(update_fields=["status", "updated_at"])

        return Response({"success": True, "data": ContactMessageSerializer(contact).data}, status=status.HTTP_200_OK)


class ContactStatusView(APIView):
    @extend_schema(
        summary="Update contact message status",
        request=MessageStatusSerializer,
        responses={
            200: OpenApiResponse(description="Message status updated successfully"),
            400: OpenApiResponse(description="Invalid status. Must be unread, read, or replied"),
            404: OpenApiResponse(description="Contact message not found"),
        },
        tags=["Contact"],
    )
    def patch(self, request, pk):
        serializer = MessageStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        contact = get_message_or_404(pk)
        contact.status = serializer.validated_data["status"]
        contact.save(update_fields=["status", "updated_at"])

        return Response({"success": True, "message": "Message status updated successfully"}, status=status.HTTP_200_OK)

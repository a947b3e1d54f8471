from django.db import models

from apps.common.models import BaseModel
from apps.common.utils import message_reference

MESSAGE_UNREAD = "unread"
MESSAGE_READ = "read"
MESSAGE_REPLIED = "replied"
MESSAGE_STATUS_CHOICES = [(MESSAGE_UNREAD, "Unread"), (MESSAGE_READ, "Read"), (MESSAGE_REPLIED, "Replied")]


class ContactMessage(BaseModel):
    name = models.CharField(max_length=100)
    email = models.EmailField()
    phone = models.CharField(max_length=20, null=True, blank=True)
    subject = models.CharField(max_length=200)
    message = models.TextField()
    status = models.CharField(max_length=10, choices=MESSAGE_STATUS_CHOICES, default=MESSAGE_UNREAD)

    def __str__(self):
        return f"{self.message_id}: {self.subject}"

    class Meta:
        db_table = "contact_messages"
        ordering = ("-created_at", "-id")

    @property
    def message_id(self):
        return message_reference(self.pk)

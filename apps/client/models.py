import logging
import uuid

from django.db import models

logger = logging.getLogger(__name__)


class Client(models.Model):
    """
    A company we deal with. Customers place jobs; suppliers (vendors) print
    them. The same company can be both.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    email = models.EmailField(null=True, blank=True)
    phone = models.CharField(max_length=50, null=True, blank=True)
    address = models.TextField(null=True, blank=True)
    is_supplier = models.BooleanField(
        default=False, help_text="Can be invited to RFQs and issued purchase orders"
    )
    notes = models.TextField(null=True, blank=True)

    django_created_at = models.DateTimeField(auto_now_add=True)
    django_updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        db_table = "workflow_client"

    def __str__(self):
        return self.name

    def get_primary_contact(self):
        return self.contacts.filter(is_primary=True).first()

    def get_notification_email(self):
        """
        Address for outbound documents: the primary contact's e-mail, falling
        back to the company's own. None when neither is on file.
        """
        contact = self.get_primary_contact()
        if contact and contact.email:
            return contact.email
        return self.email or None


class ClientContact(models.Model):
    """
    Represents a contact person for a client.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    client = models.ForeignKey(
        Client,
        on_delete=models.CASCADE,
        related_name="contacts",
        help_text="The client this contact belongs to",
    )
    name = models.CharField(max_length=255, help_text="Full name of the contact person")
    email = models.EmailField(
        null=True, blank=True, help_text="Email address of the contact"
    )
    phone = models.CharField(
        max_length=150, null=True, blank=True, help_text="Phone number of the contact"
    )
    position = models.CharField(
        max_length=255,
        null=True,
        blank=True,
        help_text="Job title if it's helpful - else leave blank",
    )
    is_primary = models.BooleanField(
        default=False,
        help_text="Indicates if this is the primary contact for the client",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-is_primary", "name"]
        db_table = "client_contact"
        verbose_name = "Client Contact"
        verbose_name_plural = "Client Contacts"

    def __str__(self):
        return f"{self.name} ({self.client.name})"

    def save(self, *args, **kwargs):
        # If this contact is being set as primary, ensure no other contacts
        # for this client are marked as primary
        if self.is_primary:
            ClientContact.objects.filter(client=self.client, is_primary=True).exclude(
                id=self.id
            ).update(is_primary=False)
        super().save(*args, **kwargs)


class SupplierManager(models.Manager):
    def get_queryset(self):
        return super().get_queryset().filter(is_supplier=True)


class Supplier(Client):
    """
    A Supplier is simply a Client with additional semantics.
    """

    objects = SupplierManager()

    class Meta:
        proxy = True

    def save(self, *args, **kwargs):
        self.is_supplier = True
        super().save(*args, **kwargs)

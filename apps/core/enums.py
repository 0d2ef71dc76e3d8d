from django.db import models
from django.utils.translation import gettext_lazy as _

class Roles(models.TextChoices):
    USER       = "user",       _("User")
    AGENT      = "agent",      _("Agent")
    AGENCY     = "agency",     _("Agency")
    SUPERADMIN = "superadmin", _("Super admin")

class PropertyTypes(models.TextChoices):
    VILLA      = "villa",      _("Villa")
    HOUSE      = "house",      _("House")
    APARTMENT  = "apartment",  _("Apartment")
    LAND       = "land",       _("Land")
    COMMERCIAL = "commercial", _("Commercial")
    OTHER      = "other",      _("Other")

class ListingTypes(models.TextChoices):
    SALE = "sale", _("Sale")
    RENT = "rent", _("Rent")

class DeletionStatus(models.TextChoices):
    ACTIVE           = "active",           _("Active")
    PENDING_DELETION = "pending_deletion", _("Pending deletion")  # agent asked, superadmin not yet confirmed
    DELETED          = "deleted",          _("Deleted")

class ViewerType(models.TextChoices):
    ACCOUNT   = "account",   _("Authenticated")
    ANONYMOUS = "anonymous", _("Anonymous")
    OWNER     = "owner",     _("Owner")  # history rows only

class ViewRejection(models.TextChoices):
    RATE_LIMITED = "rate_limited", _("Owner view rate limited (1 view per hour)")
    ABUSIVE      = "abusive",      _("Excessive viewing detected")

class ViewQuality(models.TextChoices):
    POOR      = "Poor",      _("Poor")
    FAIR      = "Fair",      _("Fair")
    GOOD      = "Good",      _("Good")
    VERY_GOOD = "Very Good", _("Very Good")
    EXCELLENT = "Excellent", _("Excellent")

from .enums import Roles

def is_superadmin(user):
    return user.is_authenticated and (user.is_superuser or getattr(user, "role", "") == Roles.SUPERADMIN)

def is_listing_owner(user, listing):
    return user.is_authenticated and listing.owner_id is not None and listing.owner_id == user.pk

USERS = [
    # agents
    {"email": "agent1@example.com", "username": "agent1", "first_name": "Agent", "last_name": "One", "role": "agent"},
    {"email": "agent2@example.com", "username": "agent2", "first_name": "Agent", "last_name": "Two", "role": "agent"},
    {"email": "agency1@example.com", "username": "agency1", "first_name": "Agency", "last_name": "One", "role": "agency"},
    # regular users
    {"email": "user1@example.com", "username": "user1", "first_name": "User", "last_name": "One", "role": "user"},
    {"email": "user2@example.com", "username": "user2", "first_name": "User", "last_name": "Two", "role": "user"},
    # superadmin
    {"email": "admin@admin.com", "username": "admin", "first_name": "Admin", "last_name": "Adm", "role": "superadmin"},
]

DEFAULT_PASSWORD = "SecurePassword1!"


def credentials_for(username: str):
    for u in USERS:
        if u.get("username") == username:
            return u.get("email"), DEFAULT_PASSWORD
    return None

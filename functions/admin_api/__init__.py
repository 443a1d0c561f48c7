"""
Admin API for the chat application.

Firebase-authenticated operations for verifying admins, banning users and
IP addresses, listing users and issuing license keys, served by FastAPI and
mirrored as Firebase HTTPS functions in `main.py`.
"""

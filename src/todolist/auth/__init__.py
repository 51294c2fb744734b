"""Authentication.

Learn: Users log in with login/password and receive a short-lived JWT
(1 hour). Every protected route resolves the bearer token to a verified
user id through a single dependency; there is no server-side session
and no revocation.
"""

"""
Members site.

The members site is a Flask application that lets visitors create an account,
log in, and view a members-only page. It is the primary repository for user
credentials, which are stored in a MongoDB collection with bcrypt-hashed
passwords.

When a user signs up or logs in, a session is registered in the distributed
key-value store (Redis), and the user is issued a session key in the form of a
signed cookie. On subsequent requests, :class:`members.auth.Auth` uses that
cookie to load the session, and the members page is only rendered for
requests that carry an authenticated, unexpired session.
"""

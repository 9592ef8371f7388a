"""
Service layer used by the API routes.

- otp: time-based one-time passwords for e-mail verification
- mailer: outgoing e-mail over SMTP
- uploads: image upload validation and local disk storage
- devices: User-Agent parsing for device sessions
- bootstrap: startup creation of the super-admin account
"""

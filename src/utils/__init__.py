"""
SMS Relay
=========

Serverless endpoint that relays a batch of SMS messages to Twilio on behalf
of a static web form. Deployed as AWS Lambda functions behind API Gateway,
with the code directory (src/) as the function root.

Handlers:
- send_sms.py        → POST/OPTIONS endpoint that validates and relays a batch
- health.py          → health and version check

Shared helpers in this package:
- config.py          → immutable Settings loaded from the environment
- secrets.py         → optional AWS Secrets Manager credential source
- twilio_client.py   → authenticated Twilio client and send capability
- http.py            → API Gateway event parsing and CORS responses
- errors.py          → request-level and provider error types
- logger.py          → structured JSON logging

Environment variables expected:
  • TWILIO_ACCOUNT_SID         - Twilio account SID
  • TWILIO_AUTH_TOKEN          - Twilio auth token
  • TWILIO_PHONE_NUMBER        - Sending number, E.164
  • ALLOWED_ORIGIN             - CORS origin (default: *)
  • MAX_MESSAGES_PER_REQUEST   - Per-request send cap (default: 10)
  • TWILIO_SECRET_NAME         - Secrets Manager secret for missing credentials (optional)
  • AWS_REGION                 - Region for Secrets Manager (default: us-east-1)
  • LOG_LEVEL                  - Log verbosity (default: INFO)
"""

__version__ = "1.0.0"

__all__ = ["__version__"]

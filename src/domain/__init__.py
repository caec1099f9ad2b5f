"""
Domain layer for contact form and portfolio feed business logic.

This layer contains:
- Data models (requests, responses, provider configs, results)
- Error taxonomy and its normalization to HTTP responses
- Validation and sanitization of submissions
- Request pipelines and provider dispatchers
"""

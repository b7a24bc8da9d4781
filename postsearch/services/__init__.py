"""Business logic services.

Services contain all business logic and are called by routes.
The post store owns validation, persistence and full-text search for posts.
"""

# Admin Dashboard
"""
Admin dashboard views over the hosted content store:
- fetcher: read-only Supabase access, QueryError, fetch scopes
- analytics: blog/comment/event summary and aggregations
- registrations: admin-only event RSVP table
"""

"""Business services: stores, identity resolution, authorization, users and posts."""

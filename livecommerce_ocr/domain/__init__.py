"""Интерфейсы, исключения и события домена."""

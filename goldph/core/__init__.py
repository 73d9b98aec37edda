"""
Core domain models, arithmetic primitives, and contracts.

Модули этого пакета не зависят от host-клиента, UI и источников цен.
"""

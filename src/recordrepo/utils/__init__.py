from recordrepo.utils.coercion import coerce, is_optional

__all__ = ["coerce", "is_optional"]

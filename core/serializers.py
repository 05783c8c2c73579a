from collections.abc import Mapping

from rest_framework import serializers


class StrictFieldsMixin:
    """
    Reject request bodies carrying fields the serializer does not declare.

    Declared read-only fields (e.g. ``status`` on application create) count as
    known and are silently ignored, as DRF normally does.
    """

    def to_internal_value(self, data):
        if isinstance(data, Mapping):
            unknown = sorted(set(data) - set(self.fields))
            if unknown:
                raise serializers.ValidationError({name: ["Unknown field."] for name in unknown})
        return super().to_internal_value(data)

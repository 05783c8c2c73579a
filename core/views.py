from rest_framework.views import APIView
from rest_framework.viewsets import ViewSetMixin


class StorageAPIView(APIView):
    """Base view whose storage component is injected through ``as_view(storage=...)``."""
    storage = None

    @classmethod
    def with_storage(cls, storage):
        """Subclass bound to ``storage``, for routers that cannot pass ``as_view`` kwargs."""
        return type(cls.__name__, (cls,), {'storage': storage, '__module__': cls.__module__})

    def initial(self, request, *args, **kwargs):
        if self.storage is None:
            raise RuntimeError(f"{self.__class__.__name__} was routed without a storage component")
        super().initial(request, *args, **kwargs)


class StorageViewSet(ViewSetMixin, StorageAPIView):
    """ViewSet flavour of StorageAPIView, registered as ``router.register(prefix, ViewSet.with_storage(storage))``."""

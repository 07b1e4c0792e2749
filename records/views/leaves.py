"""
Lab test, treatment and prescription endpoints.

The three record types share their handlers; :func:`leaf_views` builds the
flat listing, the nested collection and the nested detail view for one
:class:`~records.services.leaves.LeafKind`.  Uploaded photos arrive as
multipart files under the kind's photo field.
"""
from __future__ import annotations

from types import SimpleNamespace

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from ..permissions import IsAdminRole
from ..serializers.medical import (
    LabtestSerializer,
    LeafListQuerySerializer,
    PrescriptionSerializer,
    TreatmentSerializer,
)
from ..services import leaves as svc
from .common import created, ok, path_of, principal_of


def leaf_views(kind: svc.LeafKind, serializer_class) -> SimpleNamespace:
    title = kind.label[0].upper() + kind.label[1:]

    @api_view(['GET'])
    @permission_classes([IsAuthenticated])
    def flat_list(request):
        q = LeafListQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        rows = svc.list_leaves(kind, principal_of(request), consultation_id=q.validated_data.get('consultation_id'))
        return ok(f'{title}s retrieved successfully', **{kind.plural: rows})

    @api_view(['GET', 'POST'])
    @permission_classes([IsAuthenticated, IsAdminRole])
    def collection(request, client_id: int, pet_id: int, consultation_id: int):
        principal = principal_of(request)
        path = path_of(client_id, pet_id)
        if request.method == 'GET':
            rows = svc.list_leaves(kind, principal, consultation_id=consultation_id, path=path)
            return ok(f'{title}s retrieved successfully', **{kind.plural: rows})
        s = serializer_class(data=request.data)
        s.is_valid(raise_exception=True)
        row = svc.create_leaf(kind, principal, consultation_id, s.validated_data, path=path)
        return created(f'{title} created successfully', **{kind.singular: row})

    @api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
    @permission_classes([IsAuthenticated, IsAdminRole])
    def detail(request, client_id: int, pet_id: int, consultation_id: int, pk: int):
        principal = principal_of(request)
        path = path_of(client_id, pet_id, consultation_id)
        if request.method == 'GET':
            return ok(f'{title} retrieved successfully', **{kind.singular: svc.get_leaf(kind, principal, pk, path)})
        if request.method == 'DELETE':
            svc.delete_leaf(kind, principal, pk, path)
            return ok(f'{title} deleted successfully')
        s = serializer_class(data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        row = svc.update_leaf(kind, principal, pk, s.validated_data, path)
        return ok(f'{title} updated successfully', **{kind.singular: row})

    return SimpleNamespace(flat_list=flat_list, collection=collection, detail=detail)


labtests = leaf_views(svc.LABTESTS, LabtestSerializer)
treatments = leaf_views(svc.TREATMENTS, TreatmentSerializer)
prescriptions = leaf_views(svc.PRESCRIPTIONS, PrescriptionSerializer)

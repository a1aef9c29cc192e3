"""Product API views.

Exposes the ``ProductService`` via HTTP using a DRF ViewSet.
Input is validated by Pydantic DTOs before the service is called;
domain exceptions are caught and translated into HTTP status codes.
Anything unexpected propagates to ``api_exception_handler``.
"""

from __future__ import annotations

import structlog
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.dtos import parse_dto
from modules.core.exceptions import domain_error_response
from modules.products.dtos import (
    CategoryDTO,
    LowStockQueryDTO,
    ProductDTO,
    ProductPageRequestDTO,
    SearchQueryDTO,
)
from modules.products.exceptions import ProductAlreadyExists, ProductNotFound
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import (
    CategoryCountSerializer,
    ProductSerializer,
    serialize_page,
)
from modules.products.services import ProductService

logger = structlog.get_logger(__name__)


class ProductViewSet(GenericViewSet):
    """ViewSet for the product catalog.

    Uses ``ProductService`` with ``ProductDjangoRepository`` (DIP).
    All ORM access goes through the service/repository layer.
    """

    queryset = Product.objects.all()
    serializer_class = ProductSerializer
    lookup_value_regex = r"\d+"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(repository=ProductDjangoRepository())

    # ------------------------------------------------------------------
    # Request parsing
    # ------------------------------------------------------------------

    @staticmethod
    def _page_request(request: Request) -> ProductPageRequestDTO:
        return parse_dto(ProductPageRequestDTO, request.query_params.dict())

    @staticmethod
    def _category(value: str) -> str:
        return parse_dto(CategoryDTO, {"category": value}).category

    @staticmethod
    def _payload(request: Request) -> ProductDTO:
        data = request.data
        if hasattr(data, "dict"):  # form-encoded QueryDict
            data = data.dict()
        return parse_dto(ProductDTO, data)

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/products"""
        page_request = self._page_request(request)
        page = self._service.get_all_products(page_request)
        logger.info(
            "product.listed",
            page=page.page,
            size=page.size,
            total_elements=page.total_elements,
        )
        return Response(serialize_page(page))

    def create(self, request: Request) -> Response:
        """POST /api/v1/products"""
        dto = self._payload(request)
        try:
            product = self._service.create_product(dto)
        except ProductAlreadyExists as exc:
            return domain_error_response(exc)

        out = ProductSerializer(product)
        return Response(out.data, status=status.HTTP_201_CREATED)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/products/{pk}"""
        try:
            product = self._service.get_product(int(pk))
        except ProductNotFound as exc:
            return domain_error_response(exc)
        return Response(ProductSerializer(product).data)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/products/{pk}"""
        dto = self._payload(request)
        try:
            product = self._service.update_product(int(pk), dto)
        except (ProductNotFound, ProductAlreadyExists) as exc:
            return domain_error_response(exc)
        return Response(ProductSerializer(product).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/products/{pk}"""
        try:
            self._service.delete_product(int(pk))
        except ProductNotFound as exc:
            return domain_error_response(exc)
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ------------------------------------------------------------------
    # Look-ups
    # ------------------------------------------------------------------

    @action(detail=False, methods=["get"], url_path=r"sku/(?P<sku>[^/]+)")
    def by_sku(self, request: Request, sku: str) -> Response:
        """GET /api/v1/products/sku/{sku}"""
        product = self._service.get_product_by_sku(sku)
        if product is None:
            return domain_error_response(
                ProductNotFound(f"Product not found with SKU: {sku}")
            )
        return Response(ProductSerializer(product).data)

    @action(detail=False, methods=["get"], url_path=r"category/(?P<category>[^/.]+)")
    def by_category(self, request: Request, category: str) -> Response:
        """GET /api/v1/products/category/{category}"""
        page = self._service.get_products_by_category_page(
            self._category(category), self._page_request(request)
        )
        return Response(serialize_page(page))

    @action(detail=False, methods=["get"], url_path="search")
    def search(self, request: Request) -> Response:
        """GET /api/v1/products/search?searchTerm="""
        query = parse_dto(SearchQueryDTO, request.query_params.dict())
        page = self._service.search_products(
            query.search_term, self._page_request(request)
        )
        return Response(serialize_page(page))

    @action(
        detail=False,
        methods=["get"],
        url_path=r"category/(?P<category>[^/.]+)/search",
    )
    def search_by_category(self, request: Request, category: str) -> Response:
        """GET /api/v1/products/category/{category}/search?searchTerm="""
        category_value = self._category(category)
        query = parse_dto(SearchQueryDTO, request.query_params.dict())
        page = self._service.search_products_by_category(
            category_value, query.search_term, self._page_request(request)
        )
        return Response(serialize_page(page))

    # ------------------------------------------------------------------
    # Stock
    # ------------------------------------------------------------------

    @action(detail=False, methods=["get"], url_path="low-stock")
    def low_stock(self, request: Request) -> Response:
        """GET /api/v1/products/low-stock?threshold="""
        query = parse_dto(LowStockQueryDTO, request.query_params.dict())
        products = self._service.get_low_stock_products(query.threshold)
        return Response(ProductSerializer(products, many=True).data)

    @action(detail=False, methods=["get"], url_path="out-of-stock")
    def out_of_stock(self, request: Request) -> Response:
        """GET /api/v1/products/out-of-stock"""
        products = self._service.get_out_of_stock_products()
        return Response(ProductSerializer(products, many=True).data)

    # ------------------------------------------------------------------
    # Statistics / existence
    # ------------------------------------------------------------------

    @action(detail=False, methods=["get"], url_path="statistics/count-by-category")
    def count_by_category(self, request: Request) -> Response:
        """GET /api/v1/products/statistics/count-by-category"""
        counts = self._service.get_product_count_by_category()
        return Response(CategoryCountSerializer(counts, many=True).data)

    @action(detail=False, methods=["get"], url_path=r"exists/sku/(?P<sku>[^/]+)")
    def exists_by_sku(self, request: Request, sku: str) -> Response:
        """GET /api/v1/products/exists/sku/{sku}"""
        return Response(self._service.exists_by_sku(sku))

    @action(detail=False, methods=["get"], url_path=r"exists/name/(?P<name>[^/]+)")
    def exists_by_name(self, request: Request, name: str) -> Response:
        """GET /api/v1/products/exists/name/{name}"""
        return Response(self._service.exists_by_name(name))

    @action(
        detail=False,
        methods=["get"],
        url_path=r"category/(?P<category>[^/.]+)/count",
    )
    def category_count(self, request: Request, category: str) -> Response:
        """GET /api/v1/products/category/{category}/count"""
        return Response(self._service.count_products_by_category(self._category(category)))

# resource_registry/utils/pagination.py
from typing import Any, Dict, List, Tuple


def page_window(page: int, per_page: int) -> Tuple[int, int]:
    """페이지 번호(1부터 시작)와 페이지 크기로 (skip, limit) 값을 계산합니다."""
    return (page - 1) * per_page, per_page


def paged_result(total: int, page: int, per_page: int, result: List[Any]) -> Dict[str, Any]:
    """검색 결과를 {total, page, perPage, result} 형태로 묶습니다."""
    return {"total": total, "page": page, "perPage": per_page, "result": result}

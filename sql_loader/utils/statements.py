# sql_loader/utils/statements.py
import re
from typing import List

__all__ = ["split_statements", "preview"]

_WHITESPACE_RE = re.compile(r"\s+")
_BOM = "\ufeff"


def _trim(s: str) -> str:
    # str.strip() 은 BOM 을 공백으로 보지 않음
    return s.strip().strip(_BOM).strip()


def split_statements(sql: str) -> List[str]:
    """
    SQL 원문을 실행 단위 문장 목록으로 나눈다.
      - ';' 기준으로 단순 분할 (문자열 리터럴/주석/프로시저 본문 안의 ';'도 그대로 분할)
      - 각 조각의 앞뒤 공백(BOM U+FEFF 포함) 제거
      - 공백뿐인 조각은 버림
    예)
      "CREATE TABLE t (id INT);\n INSERT INTO t VALUES (1);" -> ["CREATE TABLE t (id INT)", "INSERT INTO t VALUES (1)"]
      "  ;; \n" -> []
    """
    if sql is None:
        return []
    return [stmt for stmt in (_trim(s) for s in sql.split(";")) if stmt]


def preview(statement: str, n: int = 60) -> str:
    """에러 메시지용 한 줄 요약. 연속 공백을 1칸으로 줄이고 n자에서 자른다."""
    flat = _WHITESPACE_RE.sub(" ", statement or "").strip()
    if len(flat) <= n:
        return flat
    return flat[: n - 3] + "..."

"""챌린지 리소스(역할 배정)와 역할/단계 참조 데이터를 관리하는 핵심 서비스 계층."""

__version__ = "0.1.0"

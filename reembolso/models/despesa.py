# reembolso/models/despesa.py
import enum

from sqlalchemy import Column, BigInteger, Integer, String, Numeric, Enum, DateTime, LargeBinary, JSON, Index
from sqlalchemy.dialects import mysql

from reembolso.db.base import Base


class EstadoDespesa(str, enum.Enum):
    pendente = "pendente"
    aprovado = "aprovado"
    reprovado = "reprovado"
    parcial = "parcial"


class Despesa(Base):
    __tablename__ = "expenses"

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    owner_id = Column(BigInteger, nullable=True, index=True,
                      comment="Usuario que solicitó el reembolso")
    amount_requested = Column(Numeric(15, 2, asdecimal=True), nullable=True)

    # ✨ WORKFLOW DE APROBACIÓN ✨
    status = Column(Enum(EstadoDespesa, name="estado_despesa"), default=EstadoDespesa.pendente, nullable=False)
    valor_aprovado = Column(Numeric(15, 2, asdecimal=True), nullable=True,
                            comment="Valor aprobado, solo con status aprovado o parcial")
    rejection_reason = Column(String(1000), nullable=True)
    approval_notes = Column(String(1000), nullable=True)

    # Comprovante: un único blob, el último adjunto reemplaza al anterior
    receipt_data = Column(LargeBinary().with_variant(mysql.LONGBLOB(), "mysql"), nullable=True)
    receipt_filename = Column(String(255), nullable=True)
    receipt_content_type = Column(String(100), nullable=True)

    # Campos libres enviados por el cliente (descripción, categoría, etc.)
    dados = Column(JSON, nullable=False, default=dict)

    created_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (Index("idx_expenses_status_owner", "status", "owner_id"),)

    @property
    def tiene_comprovante(self) -> bool:
        return bool(self.receipt_data)

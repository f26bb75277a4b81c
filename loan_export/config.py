"""Configuration management for loan-export."""

from dataclasses import dataclass, field
from pathlib import Path

from loan_export.exceptions import ConfigurationError


@dataclass
class XlsxConfig:
    """Spreadsheet renderer configuration."""

    creator: str = "Loan Export"
    currency_number_format: str = "#,##0.00"
    currency_column_width: int = 15


@dataclass
class PdfConfig:
    """Paginated document renderer configuration."""

    footer_label: str = "Loan Export"
    invariant: bool = True  # reportlab invariant mode: no embedded creation date or random ID


@dataclass
class ExportConfig:
    """Settings shared by every export."""

    default_currency: str = "KES"
    date_display_format: str = "%d %b %Y"
    xlsx: XlsxConfig = field(default_factory=XlsxConfig)
    pdf: PdfConfig = field(default_factory=PdfConfig)

    def __post_init__(self) -> None:
        if not self.default_currency:
            raise ConfigurationError("default_currency must not be empty")


@dataclass
class LoanExportConfig:
    """Main configuration for loan-export callers."""

    export: ExportConfig = field(default_factory=ExportConfig)
    loan_dir: Path = field(default_factory=lambda: Path("loans"))
    output_dir: Path = field(default_factory=lambda: Path("output"))
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "LoanExportConfig":
        """Create config from environment variables."""
        import os

        export = ExportConfig(
            default_currency=os.getenv("LOAN_EXPORT_DEFAULT_CURRENCY", "KES"),
            xlsx=XlsxConfig(creator=os.getenv("LOAN_EXPORT_CREATOR", "Loan Export")),
            pdf=PdfConfig(footer_label=os.getenv("LOAN_EXPORT_FOOTER_LABEL", "Loan Export")),
        )

        return cls(
            export=export,
            loan_dir=Path(os.getenv("LOAN_EXPORT_LOAN_DIR", "loans")),
            output_dir=Path(os.getenv("LOAN_EXPORT_OUTPUT_DIR", "output")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )

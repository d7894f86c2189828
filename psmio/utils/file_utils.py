"""
File utility functions for psmio.
"""

import logging
import uuid
from pathlib import Path
from typing import List, Union

import pyarrow as pa
import pyarrow.parquet as pq

logger = logging.getLogger(__name__)


def create_uuid_filename(prefix: str, extension: str) -> str:
    """Create a unique file name such as ``psm-<uuid>.psm.parquet``."""
    return f"{prefix}-{uuid.uuid4()}{extension}"


def validate_file(file_path: Union[str, Path]) -> bool:
    """Validate that the file exists and is not empty."""
    if not Path(file_path).exists():
        raise FileNotFoundError(f"File not found: {file_path}")
    if Path(file_path).stat().st_size == 0:
        raise ValueError(f"File {file_path} is empty")
    return True


class ParquetBatchWriter:
    """Efficient batch writer for PSM data using PyArrow."""

    def __init__(
        self,
        output_path: str,
        schema: pa.Schema,
        batch_size: int = 10000,
        compression: str = "gzip",
    ):
        """Initialize batch writer.

        Args:
            output_path: Path to output Parquet file
            schema: PyArrow schema for the data
            batch_size: Number of records to accumulate before writing
        """
        self.output_path = output_path
        self.schema = schema
        self.batch_size = batch_size
        self.batch_data = []
        self.parquet_writer = None
        self.compression = compression
        self.logger = logging.getLogger(__name__)

    def write_batch(self, records: List[dict]) -> None:
        """Add records and flush them once the batch size is reached."""
        self.batch_data.extend(records)

        if len(self.batch_data) >= self.batch_size:
            self._write_batch()

    def _write_batch(self) -> None:
        try:
            if self.batch_data:
                if self.parquet_writer is None:
                    self.parquet_writer = pq.ParquetWriter(
                        where=self.output_path,
                        schema=self.schema,
                        compression=self.compression,
                    )

                batch = pa.RecordBatch.from_pylist(self.batch_data, schema=self.schema)
                self.parquet_writer.write_batch(batch)
                self.batch_data = []

        except Exception as e:
            self.logger.error(
                f"Error during batch writing: {e}, file path: {self.output_path}"
            )
            raise

    def close(self) -> None:
        """Write any remaining data and close the writer."""
        try:
            if self.batch_data:
                self._write_batch()

            if self.parquet_writer is None:
                # Nothing was written; still produce a file with the schema
                pq.write_table(
                    self.schema.empty_table(),
                    self.output_path,
                    compression=self.compression,
                )
            else:
                self.parquet_writer.close()
                self.parquet_writer = None

        except Exception as e:
            self.logger.error(f"Error closing writer: {e}, file path: {self.output_path}")
            raise

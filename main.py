import os
import asyncio
import pandas as pd
import csv
from pathlib import Path
from typing import List, Optional
import sys
from loguru import logger

from storefront.config import (
    ALLOWED_IMAGE_SUFFIXES,
    BATCH_SIZE,
    INPUT_CSV,
    LOG_LEVEL,
    MAX_IMAGE_BYTES,
    OUTPUT_CSV,
)
from storefront.clients import PlacesClient, SerperClient, VisionClient
from storefront.extraction import NoTextDetectedError
from storefront.models import BusinessProfile
from storefront.orchestrator import analyze_image

OUTPUT_COLUMNS = [
    "image_path", "business_name", "business_type", "address", "phone", "website",
    "value_low", "value_mid", "value_high", "confidence", "error",
]


def load_image_paths(file_path: str, nrows: int = None) -> List[str]:
    """Load image paths from the `image_path` column of a CSV."""
    df = pd.read_csv(file_path, nrows=nrows)
    return [str(path) for path in df["image_path"].dropna()]


def read_image(path: str) -> bytes:
    """
    Read an image file after checking its type and size.

    Raises:
        ValueError: If the file type is unsupported or the file is too large.
    """
    if Path(path).suffix.lower() not in ALLOWED_IMAGE_SUFFIXES:
        raise ValueError(f"Invalid file type for {path}. Only JPEG, PNG, and WebP are supported.")
    if os.path.getsize(path) > MAX_IMAGE_BYTES:
        raise ValueError(f"File too large: {path}. Maximum size is {MAX_IMAGE_BYTES // (1024 * 1024)}MB.")
    return Path(path).read_bytes()


def batch_iter(paths: List[str], batch_size: int):
    """
    Yield index and path slices of size `batch_size` for batched processing.
    """
    n = len(paths)
    for i in range(0, n, batch_size):
        yield i, paths[i:i+batch_size]


def to_row(path: str, profile: Optional[BusinessProfile], error: str = "") -> list:
    """Flatten a profile (or a failed image) into one output CSV row."""
    if profile is None:
        return [path] + [""] * (len(OUTPUT_COLUMNS) - 2) + [error]

    value = profile.valuation.estimated_value
    return [
        path,
        profile.business_name,
        profile.business_type,
        profile.address or "",
        profile.phone or "",
        profile.website or "",
        value.low,
        value.mid,
        value.high,
        profile.valuation.confidence.value,
        error,
    ]


async def process_image(path: str) -> list:
    """
    Process a single storefront image through the full pipeline.

    Args:
        path (str): Path to the image file.

    Returns:
        list: Output CSV row for this image.
    """
    log = logger.bind(image=path)
    try:
        image_bytes = read_image(path)
        profile = await analyze_image(image_bytes, log=log)
        return to_row(path, profile)
    except NoTextDetectedError as e:
        log.warning(f"❌ {path}: {e}")
        return to_row(path, None, error=str(e))
    except ValueError as e:
        log.warning(f"⚠️ {path}: {e}")
        return to_row(path, None, error=str(e))
    except Exception as e:
        log.warning(f"⚠️ ERROR processing {path}: {e}")
        return to_row(path, None, error=str(e))


async def main():
    """
    Orchestrate the full batch processing pipeline.

    - Loads image paths from the input CSV.
    - Processes each batch asynchronously: OCR, lookups, valuation.
    - Writes results incrementally to an output CSV.
    """
    all_paths = load_image_paths(INPUT_CSV)

    # Initialize logs
    logger.remove()  # Remove default handler
    logger.add(sys.stderr, level=LOG_LEVEL, format="<green>{time:HH:mm:ss}</green> | <level>{message}</level>")

    # Initialize output file
    output_path = OUTPUT_CSV
    if os.path.exists(output_path):
        os.remove(output_path)
    with open(output_path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(OUTPUT_COLUMNS)

    # Process in batches, but use async.gather for parallelism within each batch
    try:
        for start_idx, batch_paths in batch_iter(all_paths, BATCH_SIZE):
            logger.info(f"Processing images {start_idx}..{start_idx + len(batch_paths) - 1}")

            rows = await asyncio.gather(*[process_image(path) for path in batch_paths])

            with open(output_path, "a", newline="") as f:
                writer = csv.writer(f)
                writer.writerows(rows)
    finally:
        # Cleanup: close client sessions to prevent unclosed connector warnings
        for client_cls in (VisionClient, PlacesClient, SerperClient):
            if client_cls._initialized:
                await client_cls._instance.close()

if __name__ == "__main__":
    asyncio.run(main())

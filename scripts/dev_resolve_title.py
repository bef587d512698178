#!/usr/bin/env python3
"""Manual script to test TMDb title resolution end to end."""

from movie_list.metadata.tmdb_client import TMDBClient
from movie_list.pipeline.resolution import ResolutionPipeline

if __name__ == "__main__":
    with TMDBClient.from_settings() as client:
        result = ResolutionPipeline(client).resolve_title("Inception", locale="de-DE")
    print(result)

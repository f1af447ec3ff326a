from __future__ import annotations

import os

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from accessory.config import GenerateOptions
from accessory.errors import FormatError, InvalidDirectoryError, PersistError, RenderError, ScanError
from accessory.filesystem import OsFilesystem
from accessory.fs_scan import scan_package
from accessory.generator import persist, render_source
from accessory.naming import output_file


app = FastAPI(title="Accessory Generator")


class GenerateRequest(GenerateOptions):
	directory: str
	write: bool = False


class GenerateResult(BaseModel):
	output_path: str
	source: str
	accessor_count: int
	written: bool


@app.get("/health")
def health() -> dict:
	return {"status": "ok"}


@app.post("/generate", response_model=GenerateResult)
def generate(req: GenerateRequest) -> GenerateResult:
	directory = os.path.abspath(req.directory)
	try:
		pkg = scan_package(directory, req.tag_key)
		generation = render_source(pkg, req.type_name, req.receiver, req.formatter)
	except InvalidDirectoryError as e:
		raise HTTPException(status_code=400, detail=str(e))
	except FormatError as e:
		raise HTTPException(status_code=422, detail={"error": str(e), "source": e.source})
	except (ScanError, RenderError) as e:
		raise HTTPException(status_code=422, detail=str(e))

	path = output_file(req.output, req.type_name, pkg.directory)
	if req.write:
		try:
			persist(OsFilesystem(), path, generation.source)
		except PersistError as e:
			raise HTTPException(status_code=500, detail=str(e))

	return GenerateResult(
		output_path=path,
		source=generation.source,
		accessor_count=generation.accessor_count,
		written=req.write,
	)


def create_app() -> FastAPI:
	return app

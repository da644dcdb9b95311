from clinparse.annotation_store import AnnotationDocument
from clinparse.pipeline import ConstituencyParserEngine

__version__ = "0.1.0"

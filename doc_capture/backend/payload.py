from doc_capture.session.models import PageList

PROCESS_PATH = "/api/process"


def build_process_request(
    page_list: PageList,
    *,
    scenario: str = "FullProcess",
    light: int = 6,
) -> dict[str, object]:
    """Build the /api/process request body; images are sent without data-URI prefix."""
    return {
        "processParam": {
            "scenario": scenario,
            "returnUncroppedImage": True,
            "multipageProcessing": True,
        },
        "List": [
            {
                "ImageData": {
                    "image": page.image.payload,
                    "light": light,
                    "page_idx": page.page_idx,
                }
            }
            for page in page_list
        ],
    }

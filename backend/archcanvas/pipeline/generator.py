from archcanvas.inference.chat_completions_client import ChatCompletionsClient
from archcanvas.ir.diagram import Diagram
from archcanvas.llm.parser import parse_design_response
from archcanvas.llm.prompt import build_messages


def generate_design(prompt: str, client: ChatCompletionsClient) -> Diagram:
    """
    One LLM round trip: prompt in, unpositioned Diagram out.

    No retries. UpstreamError and InvalidResponseFormatError propagate to
    the caller.
    """
    if not prompt or not prompt.strip():
        raise ValueError("Prompt is required")

    raw = client.generate(build_messages(prompt))
    diagram = parse_design_response(raw)

    print(
        f"[Generate] '{diagram.title}': "
        f"{len(diagram.components)} components, {len(diagram.connections)} connections"
    )
    return diagram

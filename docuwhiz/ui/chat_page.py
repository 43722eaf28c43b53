"""NiceGUI chat page: PDF upload on the left, chat panel on the right."""

import os

from nicegui import events, ui

from docuwhiz.chat.config import ChatConfig, get_chat_config
from docuwhiz.chat.messages import Message, Role
from docuwhiz.chat.session import SessionController
from docuwhiz.ui.api_client import PDF_MIME_TYPE, DocumentClient
from docuwhiz.ui.markdown import markdown_to_html, plain_to_html

TYPING_TEXT = "DocuWhiZ is typing..."

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f5f5f5; min-height: 100vh; }

    .panel {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }

    .header { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); }

    .message-user {
        background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
        color: white;
        border-radius: 18px 18px 4px 18px;
    }

    .message-assistant {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
    }

    .typing-dot {
        width: 8px; height: 8px;
        background: #667eea;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }

    .message-assistant strong { font-weight: 600; }
    .message-assistant code { font-family: 'Menlo', 'Monaco', monospace; }
    .message-assistant a { color: #4f46e5; }
</style>
"""


def render_message(msg: Message) -> None:
    """Render one chat bubble. Assistant text goes through markdown."""
    is_user = msg.sender is Role.USER
    align = "justify-end" if is_user else "justify-start"
    bubble = "message-user" if is_user else "message-assistant"
    content = plain_to_html(msg.text) if is_user else markdown_to_html(msg.text)

    with ui.row().classes(f"w-full {align}"):
        with ui.element("div").classes(f"max-w-[75%] px-4 py-3 {bubble}"):
            ui.html(content, sanitize=False).classes("text-sm leading-relaxed")


def render_typing_indicator() -> None:
    with ui.row().classes("w-full justify-start"):
        with ui.element("div").classes("message-assistant px-4 py-3"):
            with ui.row().classes("items-center gap-2"):
                with ui.row().classes("gap-1"):
                    for _ in range(3):
                        ui.element("div").classes("typing-dot")
                ui.label(TYPING_TEXT).classes("text-sm text-gray-500 italic")


@ui.page("/")
def chat_page() -> None:
    """Main page. Every browser tab gets its own session."""
    ui.add_head_html(CUSTOM_CSS)
    config: ChatConfig = get_chat_config()

    @ui.refreshable
    def messages_view() -> None:
        for msg in session.engine.visible_messages():
            render_message(msg)
        if session.engine.is_streaming:
            render_typing_indicator()

    @ui.refreshable
    def upload_status() -> None:
        if session.upload_feedback:
            ui.label(session.upload_feedback).classes("text-sm text-gray-600")
        ui.label(session.status_message).classes("text-xs text-gray-400")

    scroll: ui.scroll_area | None = None

    def on_change() -> None:
        messages_view.refresh()
        if scroll is not None:
            scroll.scroll_to(percent=1.0)

    session = SessionController(DocumentClient(config), config, on_change=on_change)

    async def handle_upload(e: events.UploadEventArguments) -> None:
        data = await e.file.read()
        mime_type = e.file.content_type or PDF_MIME_TYPE
        await session.upload(data, e.file.name, mime_type)
        upload_status.refresh()
        uploader.reset()

    def send() -> None:
        session.engine.send_message()

    with ui.row().classes("w-full max-w-6xl mx-auto p-4 md:p-8 gap-6 no-wrap items-start"):
        with ui.column().classes("w-80 panel p-5 gap-4"):
            ui.label("📄 Upload PDF").classes("text-lg font-semibold")
            uploader = (
                ui.upload(on_upload=handle_upload, auto_upload=True, max_files=1)
                .props(f"accept={PDF_MIME_TYPE} flat bordered")
                .classes("w-full")
            )
            upload_status()

        with ui.column().classes("flex-grow panel").style("height: calc(100vh - 4rem)"):
            with ui.row().classes("w-full header px-5 py-4 items-center"):
                ui.icon("smart_toy").classes("text-white text-3xl")
                ui.label("💬 Chat with DocuWhiZ").classes("text-lg font-semibold text-white")

            with ui.scroll_area().classes("flex-grow w-full bg-gray-50") as scroll:
                with ui.column().classes("w-full p-5 gap-4"):
                    messages_view()

            with ui.row().classes("w-full p-4 gap-3 items-end bg-white border-t"):
                (
                    ui.textarea(placeholder="Ask your question about the PDF...")
                    .props("autogrow outlined dense rows=1")
                    .classes("flex-grow")
                    .bind_value(session.engine.state, "pending_input")
                    .on("keydown.enter.prevent", send)
                )
                ui.button(icon="send", on_click=send).props("round unelevated color=primary")


def main() -> None:
    ui.run(title="DocuWhiz", port=int(os.getenv("UI_PORT", "8080")), reload=False)


if __name__ == "__main__":
    main()

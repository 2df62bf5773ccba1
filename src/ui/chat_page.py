"""NiceGUI chat interface with document upload."""

from datetime import datetime

from nicegui import events, ui

from src.agent.conversation import Conversation
from src.agent.exceptions import ConversationBusyError, DocumentUploadError
from src.models.schemas import ChatTurn, DocumentTopic, Role, UploadedDocument
from src.parsing.extractor import UnsupportedDocumentError
from src.ui.api_client import ChatApiClient

ACCEPTED_FILES = ".txt,.md,.json,.pdf,.doc,.docx,text/*,application/pdf"

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f5f5f5; min-height: 100vh; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }

    .header { background: #EA681F; }

    .message-user {
        background: #EA681F;
        color: white;
        border-radius: 18px 18px 4px 18px;
    }

    .message-assistant {
        background: #FBFBFB;
        border: 1px solid #EEEEEE;
        color: #000000;
        border-radius: 18px 18px 18px 4px;
    }

    .input-box {
        background: #f9fafb;
        border: 1px solid #e5e7eb;
        border-radius: 12px;
    }
    .input-box:focus-within { border-color: #EA681F; }

    .send-btn { background: #EA681F !important; }
</style>
"""


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    conversation = Conversation(topic=DocumentTopic.FINANCIAL_AID)
    api = ChatApiClient()
    timestamps: list[str] = []

    messages_container: ui.column
    attachment_row: ui.row
    attachment_label: ui.label
    input_field: ui.input
    send_btn: ui.button
    uploader: ui.upload

    def render_message(turn: ChatTurn, time: str) -> None:
        is_user = turn.role is Role.USER
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-assistant"

        with ui.row().classes(f"w-full {align}"):
            with ui.column().classes("max-w-[75%] gap-1"):
                with ui.element("div").classes(f"px-4 py-3 {bubble}"):
                    ui.label(f"{'You' if is_user else 'AI'}:").classes("text-xs font-semibold")
                    ui.label(turn.content).classes("text-sm whitespace-pre-wrap")
                ui.label(time).classes(
                    f"text-[10px] text-gray-400 {'self-end' if is_user else 'self-start'}"
                )

    def refresh_messages() -> None:
        messages_container.clear()
        with messages_container:
            if not conversation.turns:
                with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                    ui.icon("forum").classes("text-5xl text-gray-300")
                    ui.label("Ask a question or upload a document").classes(
                        "text-lg text-gray-400"
                    )
            for turn, time in zip(conversation.turns, timestamps, strict=False):
                render_message(turn, time)
            if conversation.is_busy:
                ui.label("AI is typing...").classes("text-sm text-gray-500 italic")

    def refresh_attachment() -> None:
        document = conversation.pending_document
        attachment_row.set_visibility(document is not None)
        attachment_label.set_text(document.filename if document else "")

    def on_turn(turn: ChatTurn) -> None:
        timestamps.append(datetime.now().strftime("%I:%M %p"))
        refresh_messages()

    async def handle_upload(e: events.UploadEventArguments) -> None:
        document = UploadedDocument(
            filename=e.file.name,
            content_type=e.file.content_type,
            content=await e.file.read(),
        )
        try:
            conversation.attach_document(document)
        except UnsupportedDocumentError:
            ui.notify(
                "Unsupported file type. Please upload a text, PDF, or Word document.",
                type="warning",
            )
        finally:
            uploader.reset()
            refresh_attachment()

    def remove_attachment() -> None:
        conversation.clear_document()
        refresh_attachment()

    def select_topic(e: events.ValueChangeEventArguments) -> None:
        conversation.topic = DocumentTopic(e.value)

    async def send_message() -> None:
        if conversation.is_busy:
            return
        text = input_field.value or ""
        if not text.strip() and conversation.pending_document is None:
            return

        input_field.value = ""
        send_btn.disable()
        uploader.disable()
        try:
            await conversation.submit(text, api, on_turn=on_turn)
        except DocumentUploadError as e:
            ui.notify(f"Could not read the document: {e}", type="negative")
        except ConversationBusyError:
            pass
        finally:
            send_btn.enable()
            uploader.enable()
            refresh_attachment()
            refresh_messages()

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-3xl mx-auto app-container").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
        # Header
        with ui.row().classes("w-full header px-5 py-4 items-center"):
            ui.icon("smart_toy").classes("text-white text-3xl")
            ui.label("Lightyear AI").classes("text-lg font-semibold text-white")

        # Topic selector
        with ui.row().classes("w-full px-5 pt-3"):
            ui.toggle(
                [topic.value for topic in DocumentTopic],
                value=conversation.topic.value if conversation.topic else None,
                on_change=select_topic,
            ).props("unelevated toggle-color=orange")

        # Messages
        with (
            ui.scroll_area().classes("flex-grow w-full bg-gray-50"),
            ui.column().classes("w-full p-5"),
        ):
            messages_container = ui.column().classes("w-full gap-4")
            refresh_messages()

        # Attached document
        with ui.row().classes("w-full px-4 items-center gap-2") as attachment_row:
            ui.icon("description").classes("text-gray-500")
            attachment_label = ui.label().classes("text-sm text-gray-600")
            ui.button(icon="close", on_click=remove_attachment).props("flat round dense")
        refresh_attachment()

        # Input
        with ui.row().classes("w-full p-4 gap-3 items-center bg-white border-t"):
            uploader = (
                ui.upload(on_upload=handle_upload, auto_upload=True, max_files=1)
                .props(f'accept="{ACCEPTED_FILES}" flat dense')
                .classes("w-48")
            )
            with ui.element("div").classes("flex-grow input-box px-3 py-1"):
                input_field = (
                    ui.input(placeholder="Type a message...")
                    .props("borderless dense")
                    .classes("w-full")
                    .on("keydown.enter", send_message)
                )
            send_btn = (
                ui.button(icon="send", on_click=send_message)
                .props("round unelevated")
                .classes("send-btn")
            )


def main() -> None:
    ui.run(title="Lightyear AI", port=8080, reload=False)


if __name__ == "__main__":
    main()

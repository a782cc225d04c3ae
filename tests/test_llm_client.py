from unittest.mock import patch
import pytest

from lmiq.environment import LLMClient, LLMResponse, Message


class TestLLMClientInitialization:
    """Test cases for LLM client initialization."""

    def test_init_with_model_only(self):
        """Initialize with just a model name."""
        client = LLMClient(model="gpt-5-nano")
        assert client.model == "gpt-5-nano"
        assert client.temperature == 1.0
        assert client.max_tokens is None
        assert client.messages == []

    def test_init_with_temperature(self):
        """Initialize with custom temperature."""
        client = LLMClient(model="gpt-5-nano", temperature=0.5)
        assert client.temperature == 0.5

    def test_init_with_max_tokens(self):
        """Initialize with max_tokens."""
        client = LLMClient(model="gpt-5-nano", max_tokens=100)
        assert client.max_tokens == 100

    def test_init_with_additional_params(self):
        """Initialize with additional litellm parameters."""
        client = LLMClient(model="gpt-5-nano", top_p=0.9, frequency_penalty=0.5)
        assert client.additional_params["top_p"] == 0.9
        assert client.additional_params["frequency_penalty"] == 0.5

    def test_no_additional_params(self):
        client = LLMClient(model="gpt-5-nano")
        assert client.additional_params == {}


class TestMessageManagement:
    """Test cases for message management."""

    def test_add_multiple_messages(self):
        """Add multiple messages in sequence."""
        client = LLMClient(model="gpt-5-nano")
        client.add_message("system", "You solve mazes.")
        client.add_message("user", "Here is a maze.")
        client.add_message("assistant", "<moves>UP</moves>")

        roles = [msg["role"] for msg in client.messages]
        assert roles == ["system", "user", "assistant"]

    def test_clear_messages(self):
        """Clear all messages from conversation."""
        client = LLMClient(model="gpt-5-nano")
        client.add_message("user", "Message 1")
        client.add_message("user", "Message 2")

        client.clear_messages()
        assert len(client.messages) == 0

    def test_get_messages_returns_copy(self):
        """get_messages should return a copy, not reference."""
        client = LLMClient(model="gpt-5-nano")
        client.add_message("user", "Hello!")

        messages = client.get_messages()
        messages.append({"role": "user", "content": "Should not affect client"})

        assert len(client.messages) == 1
        assert len(messages) == 2

    def test_invalid_role(self):
        """Invalid role should raise validation error."""
        with pytest.raises(Exception):  # Pydantic validation error
            Message(role="invalid", content="Test")


class TestCompletion:
    """Test cases for completion generation."""

    @patch('litellm.completion')
    def test_completion_basic(self, mock_completion, mock_response):
        """Test basic completion call."""
        mock_completion.return_value = mock_response(content="Hello!")

        client = LLMClient(model="gpt-5-nano")
        client.add_message("user", "Hi")
        response = client.completion()

        mock_completion.assert_called_once()
        call_kwargs = mock_completion.call_args[1]
        assert call_kwargs["model"] == "gpt-5-nano"
        assert call_kwargs["messages"] == [{"role": "user", "content": "Hi"}]
        assert call_kwargs["temperature"] == 1.0
        assert response.choices[0].message.content == "Hello!"

    @patch('litellm.completion')
    def test_completion_sends_full_history(self, mock_completion, mock_response):
        """The whole conversation goes to the model."""
        mock_completion.return_value = mock_response()

        client = LLMClient(model="gpt-5-nano")
        client.add_message("system", "System")
        client.add_message("user", "Maze")
        client.completion()

        call_kwargs = mock_completion.call_args[1]
        assert [m["role"] for m in call_kwargs["messages"]] == ["system", "user"]

    @patch('litellm.completion')
    def test_completion_with_max_tokens(self, mock_completion, mock_response):
        mock_completion.return_value = mock_response()

        client = LLMClient(model="gpt-5-nano", max_tokens=150)
        client.add_message("user", "Test")
        client.completion()

        assert mock_completion.call_args[1]["max_tokens"] == 150

    @patch('litellm.completion')
    def test_completion_without_max_tokens(self, mock_completion, mock_response):
        mock_completion.return_value = mock_response()

        client = LLMClient(model="gpt-5-nano")
        client.add_message("user", "Test")
        client.completion()

        assert "max_tokens" not in mock_completion.call_args[1]

    @patch('litellm.completion')
    def test_completion_with_additional_params(self, mock_completion, mock_response):
        """Test completion includes additional parameters."""
        mock_completion.return_value = mock_response()

        client = LLMClient(model="gpt-5-nano", top_p=0.9)
        client.add_message("user", "Test")
        client.completion(n=2)

        call_kwargs = mock_completion.call_args[1]
        assert call_kwargs["top_p"] == 0.9
        assert call_kwargs["n"] == 2

    @patch('litellm.completion')
    def test_reasoning_effort_allowed(self, mock_completion, mock_response):
        """reasoning_effort is whitelisted for OpenAI-compatible providers."""
        mock_completion.return_value = mock_response()

        client = LLMClient(model="openrouter/some-model", reasoning_effort="high")
        client.completion()

        call_kwargs = mock_completion.call_args[1]
        assert call_kwargs["reasoning_effort"] == "high"
        assert "reasoning_effort" in call_kwargs["allowed_openai_params"]


class TestComplete:
    """Test cases for the response-wrapping complete() call."""

    @patch('litellm.completion')
    def test_complete_returns_llm_response(self, mock_completion, mock_response):
        mock_completion.return_value = mock_response(content="<moves>UP</moves>")

        client = LLMClient(model="gpt-5-nano")
        client.add_message("user", "Maze")
        response = client.complete()

        assert isinstance(response, LLMResponse)
        assert response.content == "<moves>UP</moves>"
        assert response.finish_reason == "stop"
        assert response.prompt_tokens == 5
        assert response.completion_tokens == 10
        assert response.total_tokens == 15

    @patch('litellm.completion')
    def test_complete_records_assistant_message(self, mock_completion, mock_response):
        mock_completion.return_value = mock_response(content="<moves>UP</moves>")

        client = LLMClient(model="gpt-5-nano")
        client.add_message("user", "Maze")
        client.complete()

        assert client.messages[-1] == {"role": "assistant", "content": "<moves>UP</moves>"}

    @patch('litellm.completion')
    def test_complete_none_content(self, mock_completion, mock_response):
        """A reply with no text becomes an empty string."""
        response = mock_response(finish_reason="length")
        response.choices[0].message.content = None
        mock_completion.return_value = response

        client = LLMClient(model="gpt-5-nano")
        result = client.complete()

        assert result.content == ""
        assert result.finish_reason == "length"

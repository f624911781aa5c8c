# Shared configuration and helpers
